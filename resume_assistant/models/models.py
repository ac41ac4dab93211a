from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class DocumentFormat(str, Enum):
    """Document formats the extractor can decode"""
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"
    TXT = "txt"
    MD = "md"


class DocumentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: Optional[int] = None
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    creation_date: Optional[datetime] = None
    modification_date: Optional[datetime] = None


class ParsedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    format: DocumentFormat
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
