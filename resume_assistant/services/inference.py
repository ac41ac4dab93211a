"""
Inference Gateway: prompt construction and calls to a local Ollama server
"""
from typing import List, Optional

import requests
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError

from resume_assistant.helpers.prompts import (
    build_grade_prompt,
    build_match_prompt,
    build_optimize_prompt,
    build_parse_job_prompt,
)
from resume_assistant.models.ai_settings import (
    GenerationOptions,
    InferenceRequest,
    LLMSettings,
    OllamaResponse,
)
from resume_assistant.utils.exceptions import InferenceError, ModelUnavailableError
from resume_assistant.utils.logging_config import PerformanceMonitor, get_logger
from resume_assistant.utils.utils import LLM_MODEL, OLLAMA, OLLAMA_TIMEOUT

logger = get_logger(__name__)

GRADE_TEMPERATURE = 0.3
OPTIMIZE_TEMPERATURE = 0.3
PARSE_JOB_TEMPERATURE = 0.2
MATCH_TEMPERATURE = 0.3


class InferenceGateway:
    """Stateless client for the Ollama HTTP API. Every call is an independent request."""

    def __init__(self, settings: LLMSettings = None):
        self.settings = settings or LLMSettings()

    @property
    def base_url(self) -> str:
        return self.settings.base_url.rstrip("/")

    # ==================== CONNECTIVITY ====================

    def _check_connection_sync(self) -> bool:
        try:
            resp = requests.get(f"{self.base_url}/api/version", timeout=self.settings.timeout)
            return resp.ok
        except Exception as e:
            logger.warning(f"Ollama connection error at {self.base_url}: {e}")
            return False

    async def check_connection(self) -> bool:
        """Probe /api/version. Returns False instead of raising."""
        return await run_in_threadpool(self._check_connection_sync)

    def _list_models_sync(self) -> List[str]:
        try:
            resp = requests.get(f"{self.base_url}/api/tags", timeout=self.settings.timeout)
            resp.raise_for_status()
            models = resp.json().get("models") or []
            return [m["name"] for m in models if isinstance(m, dict) and m.get("name")]
        except Exception as e:
            logger.warning(f"Error fetching models from {self.base_url}: {e}")
            return []

    async def list_models(self) -> List[str]:
        """Names reported by /api/tags, or [] when the server cannot be queried."""
        return await run_in_threadpool(self._list_models_sync)

    # ==================== GENERATION ====================

    def _generate_sync(self, request: InferenceRequest) -> str:
        payload = {
            "model": request.model_name,
            "prompt": request.prompt,
            "stream": False,
        }
        if request.options:
            payload["options"] = request.options.model_dump(exclude_none=True)

        try:
            with PerformanceMonitor(f"ollama generate ({request.model_name})", logger, threshold_ms=30000):
                resp = requests.post(
                    f"{self.base_url}/api/generate",
                    json=payload,
                    timeout=self.settings.timeout,
                )
        except requests.RequestException as e:
            raise InferenceError(
                f"Ollama request failed: {e}", model_name=request.model_name, cause=e
            ) from e

        if not resp.ok:
            raise InferenceError(
                f"Ollama API error: {resp.status_code} {resp.reason}",
                model_name=request.model_name,
                status_code=resp.status_code,
            )

        try:
            reply = OllamaResponse.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as e:
            raise InferenceError(
                "Ollama returned an undecodable reply", model_name=request.model_name, cause=e
            ) from e
        return reply.response

    async def generate(self, request: InferenceRequest) -> str:
        """POST /api/generate in non-streaming mode and return the `response` text."""
        return await run_in_threadpool(self._generate_sync, request)

    async def _run_task(self, task: str, prompt: str, temperature: float) -> str:
        logger.info(f"Running {task} with model {self.settings.model_name} (prompt {len(prompt)} chars)")
        return await self.generate(InferenceRequest(
            model_name=self.settings.model_name,
            prompt=prompt,
            options=GenerationOptions(temperature=temperature),
        ))

    # ==================== TASKS ====================

    async def grade_resume(self, resume: str, job_description: Optional[str] = None) -> str:
        return await self._run_task(
            "grade_resume", build_grade_prompt(resume, job_description), GRADE_TEMPERATURE
        )

    async def optimize_resume(self, resume: str, job_description: str) -> str:
        return await self._run_task(
            "optimize_resume", build_optimize_prompt(resume, job_description), OPTIMIZE_TEMPERATURE
        )

    async def parse_job_description(self, job_description: str) -> str:
        return await self._run_task(
            "parse_job_description", build_parse_job_prompt(job_description), PARSE_JOB_TEMPERATURE
        )

    async def match_resume_to_job(self, resume: str, job_description: str) -> str:
        return await self._run_task(
            "match_resume_to_job", build_match_prompt(resume, job_description), MATCH_TEMPERATURE
        )


gateway = InferenceGateway(LLMSettings(model_name=LLM_MODEL, base_url=OLLAMA, timeout=OLLAMA_TIMEOUT))


async def ensure_model_server(client: InferenceGateway) -> None:
    """Raise ModelUnavailableError unless the connectivity probe succeeds."""
    if not await client.check_connection():
        raise ModelUnavailableError(base_url=client.base_url)
