from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

# -------- Requests --------
# The browser client posts camelCase keys; snake_case is accepted as well.

class ResumeAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume: Optional[str] = None
    job_description: Optional[str] = Field(default=None, alias="jobDescription")


class JobDescriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_description: Optional[str] = Field(default=None, alias="jobDescription")

# -------- Responses --------

class FileParseResponse(BaseModel):
    content: str
    metadata: Dict[str, Any] = {}
    filename: str
    size: int
    type: Optional[str] = None


class FileCapabilities(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    supported_extensions: List[str] = Field(serialization_alias="supportedExtensions")
    supported_mime_types: List[str] = Field(serialization_alias="supportedMimeTypes")
    max_file_size: str = Field(serialization_alias="maxFileSize")


class ConnectionStatus(BaseModel):
    connected: bool
    models: List[str] = []
    error: Optional[str] = None
