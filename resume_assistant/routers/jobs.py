from typing import Any

from fastapi import APIRouter, Request

from resume_assistant.models.schemas import JobDescriptionRequest
from resume_assistant.services.inference import ensure_model_server, gateway
from resume_assistant.utils.exceptions import ValidationError
from resume_assistant.utils.logging_config import get_logger
from resume_assistant.utils.utils import parse_model_json

router = APIRouter()
logger = get_logger(__name__)


@router.post("/parse")
async def parse_job_description(payload: JobDescriptionRequest, request: Request) -> Any:
    """Extract title, requirements, salary and similar fields from a job posting"""
    request_id = getattr(request.state, 'request_id', 'unknown')
    if not payload.job_description or not payload.job_description.strip():
        raise ValidationError("Job description is required", field="jobDescription")

    await ensure_model_server(gateway)

    logger.info(
        f"Parsing job description ({len(payload.job_description)} chars)",
        extra={"request_id": request_id}
    )
    raw = await gateway.parse_job_description(payload.job_description)
    return parse_model_json(raw, task="parse_job")
