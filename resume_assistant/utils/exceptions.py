"""
Custom Exception Classes for Resume Assistant API
"""
from typing import Dict, Any
from fastapi import HTTPException


class ResumeAssistantError(Exception):
    """Base exception for Resume Assistant API"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(ResumeAssistantError):
    """Raised when a required request field is missing or empty"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        if value is not None:
            details['invalid_value'] = str(value)
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)


class UnsupportedFormatError(ResumeAssistantError):
    """Raised when neither MIME type nor extension names a supported format"""

    def __init__(self, message: str, filename: str = None, mime_type: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if filename:
            details['filename'] = filename
        if mime_type:
            details['mime_type'] = mime_type
        super().__init__(message, error_code="UNSUPPORTED_FORMAT", details=details, **kwargs)


class FileTooLargeError(ResumeAssistantError):
    """Raised when an upload exceeds the size ceiling"""

    def __init__(self, message: str, size: int = None, limit: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if size is not None:
            details['size'] = size
        if limit is not None:
            details['limit'] = limit
        super().__init__(message, error_code="FILE_TOO_LARGE", details=details, **kwargs)


class ExtractionFailedError(ResumeAssistantError):
    """Raised when a document library cannot decode the uploaded bytes"""

    def __init__(self, message: str, file_format: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if file_format:
            details['format'] = file_format
        self.file_format = file_format
        super().__init__(message, error_code="EXTRACTION_FAILED", details=details, **kwargs)


class InferenceError(ResumeAssistantError):
    """Raised when the model server call fails or returns a non-success status"""

    def __init__(self, message: str, model_name: str = None, status_code: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if model_name:
            details['model_name'] = model_name
        if status_code:
            details['status_code'] = status_code
        super().__init__(message, error_code="INFERENCE_ERROR", details=details, **kwargs)


class ModelUnavailableError(ResumeAssistantError):
    """Raised when the model server does not answer the connectivity probe"""

    def __init__(self, message: str = "Ollama service is not available", base_url: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if base_url:
            details['base_url'] = base_url
        super().__init__(message, error_code="MODEL_UNAVAILABLE", details=details, **kwargs)


class MalformedModelOutputError(ResumeAssistantError):
    """Raised when the model reply is not the JSON document the task asked for"""

    def __init__(self, message: str = "Invalid response from AI service", task: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if task:
            details['task'] = task
        super().__init__(message, error_code="MALFORMED_MODEL_OUTPUT", details=details, **kwargs)


# HTTP Exception Mapping
def map_to_http_exception(exc: ResumeAssistantError) -> HTTPException:
    """Map custom exceptions to HTTP exceptions"""

    status_code_mapping = {
        ValidationError: 400,
        UnsupportedFormatError: 400,
        FileTooLargeError: 400,
        ExtractionFailedError: 500,
        MalformedModelOutputError: 500,
        InferenceError: 502,
        ModelUnavailableError: 503,
    }

    status_code = status_code_mapping.get(type(exc), 500)

    # `error` is the display string, error_detail the structured form
    detail = {
        "error": exc.message,
        "error_detail": exc.to_dict()
    }

    return HTTPException(status_code=status_code, detail=detail)
