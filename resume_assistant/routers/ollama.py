from fastapi import APIRouter
from fastapi.responses import JSONResponse

from resume_assistant.models.schemas import ConnectionStatus
from resume_assistant.services.inference import gateway
from resume_assistant.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/connection", response_model=ConnectionStatus, response_model_exclude_none=True)
async def check_connection():
    """Report whether the Ollama server answers and which models it serves"""
    try:
        connected = await gateway.check_connection()
        models = await gateway.list_models() if connected else []
        logger.info(f"Ollama connected={connected}, {len(models)} models available")
        return ConnectionStatus(connected=connected, models=models)
    except Exception as e:
        logger.error(f"Error checking Ollama connection: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ConnectionStatus(
                connected=False, models=[], error="Failed to check connection"
            ).model_dump(),
        )
