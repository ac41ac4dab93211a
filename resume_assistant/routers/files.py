from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

import resume_assistant.helpers.parsing as parsing
from resume_assistant.models.schemas import FileCapabilities, FileParseResponse
from resume_assistant.utils.exceptions import FileTooLargeError, UnsupportedFormatError, ValidationError
from resume_assistant.utils.logging_config import PerformanceMonitor, get_logger
from resume_assistant.utils.utils import MAX_UPLOAD_BYTES, size_label

router = APIRouter()
logger = get_logger(__name__)


def _check_size(size: Optional[int]) -> None:
    if size is not None and size > MAX_UPLOAD_BYTES:
        raise FileTooLargeError(
            f"File size too large. Maximum size is {size_label(MAX_UPLOAD_BYTES)}.",
            size=size,
            limit=MAX_UPLOAD_BYTES,
        )


@router.post("/parse", response_model=FileParseResponse)
async def parse_file(request: Request, file: Optional[UploadFile] = File(None)):
    """Extract text and metadata from an uploaded resume"""
    request_id = getattr(request.state, 'request_id', 'unknown')

    if file is None:
        raise ValidationError("No file provided", field="file")

    filename = file.filename or ""
    try:
        fmt = parsing.classify(filename, file.content_type)
    except UnsupportedFormatError as e:
        raise UnsupportedFormatError(
            f"Unsupported file type. Supported types: {', '.join(parsing.supported_extensions())}",
            filename=filename,
            mime_type=file.content_type,
        ) from e

    # Multipart parsing records the spooled size; reject before pulling it into memory
    _check_size(file.size)
    data = await file.read()
    _check_size(len(data))

    logger.info(
        f"Parsing upload {filename!r} as {fmt.value} ({len(data)} bytes, declared {file.content_type})",
        extra={"request_id": request_id, "format": fmt.value, "size": len(data)}
    )

    with PerformanceMonitor(f"extract {filename}", logger):
        parsed = await run_in_threadpool(parsing.extract, data, filename, file.content_type)

    return FileParseResponse(
        content=parsed.content,
        metadata=parsed.metadata.model_dump(mode="json", exclude_none=True),
        filename=filename,
        size=len(data),
        type=file.content_type,
    )


@router.get("/parse", response_model=FileCapabilities)
async def file_capabilities():
    """Advertise the formats and size ceiling accepted by /parse"""
    return FileCapabilities(
        supported_extensions=parsing.supported_extensions(),
        supported_mime_types=parsing.supported_mime_types(),
        max_file_size=size_label(MAX_UPLOAD_BYTES),
    )
