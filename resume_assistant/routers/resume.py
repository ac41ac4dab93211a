from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

from resume_assistant.models.schemas import ResumeAnalysisRequest
from resume_assistant.services.inference import ensure_model_server, gateway
from resume_assistant.utils.exceptions import ValidationError
from resume_assistant.utils.logging_config import get_logger
from resume_assistant.utils.utils import parse_model_json, parse_model_object

router = APIRouter()
logger = get_logger(__name__)


def _has_text(value: str) -> bool:
    return bool(value and value.strip())


@router.post("/grade")
async def grade_resume(payload: ResumeAnalysisRequest, request: Request) -> Dict[str, Any]:
    """Grade a resume, optionally against a job description"""
    request_id = getattr(request.state, 'request_id', 'unknown')
    if not _has_text(payload.resume):
        raise ValidationError("Resume content is required", field="resume")

    await ensure_model_server(gateway)

    logger.info(
        f"Grading resume ({len(payload.resume)} chars, job description: {_has_text(payload.job_description)})",
        extra={"request_id": request_id}
    )
    job_description = payload.job_description if _has_text(payload.job_description) else None
    raw = await gateway.grade_resume(payload.resume, job_description)
    result = parse_model_object(raw, task="grade")
    result["gradedAt"] = datetime.now(timezone.utc).isoformat()
    return result


@router.post("/optimize")
async def optimize_resume(payload: ResumeAnalysisRequest, request: Request) -> Any:
    """Suggest concrete edits that tailor a resume to a job description"""
    request_id = getattr(request.state, 'request_id', 'unknown')
    if not _has_text(payload.resume) or not _has_text(payload.job_description):
        raise ValidationError("Resume and job description are required", field="resume, jobDescription")

    await ensure_model_server(gateway)

    logger.info("Optimizing resume against job description", extra={"request_id": request_id})
    raw = await gateway.optimize_resume(payload.resume, payload.job_description)
    return parse_model_json(raw, task="optimize")


@router.post("/match")
async def match_resume(payload: ResumeAnalysisRequest, request: Request) -> Dict[str, Any]:
    """Score how well a resume matches a job description"""
    request_id = getattr(request.state, 'request_id', 'unknown')
    if not _has_text(payload.resume) or not _has_text(payload.job_description):
        raise ValidationError("Resume and job description are required", field="resume, jobDescription")

    await ensure_model_server(gateway)

    logger.info("Matching resume to job description", extra={"request_id": request_id})
    raw = await gateway.match_resume_to_job(payload.resume, payload.job_description)
    result = parse_model_object(raw, task="match")
    result["analyzedAt"] = datetime.now(timezone.utc).isoformat()
    return result
