import os
import json
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from resume_assistant.utils.exceptions import MalformedModelOutputError

load_dotenv()

OLLAMA = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
LLM_MODEL = os.getenv("LLM_MODEL", "llama3.2")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))


def size_label(num_bytes: int) -> str:
    """Human form of a byte ceiling: 10485760 -> "10MB", 524288 -> "512KB"."""
    for unit, scale in (("MB", 1024 * 1024), ("KB", 1024)):
        if num_bytes >= scale and num_bytes % scale == 0:
            return f"{num_bytes // scale}{unit}"
    return f"{num_bytes} bytes"


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


# None means requests waits on the model server indefinitely
OLLAMA_TIMEOUT = _optional_float("OLLAMA_TIMEOUT")


def parse_model_json(raw: str, task: str = None) -> Any:
    """
    Decode a model reply that was asked to be JSON.

    The reply is trusted verbatim: no fence stripping, no schema checks.
    Any JSON value is returned as decoded; text that does not parse raises
    MalformedModelOutputError.
    """
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedModelOutputError(task=task, cause=e) from e


def parse_model_object(raw: str, task: str = None) -> Dict[str, Any]:
    """parse_model_json for replies the server extends with its own keys."""
    data = parse_model_json(raw, task=task)
    if not isinstance(data, dict):
        raise MalformedModelOutputError(
            task=task,
            details={"received_type": type(data).__name__}
        )
    return data
