import io
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from docx import Document
from pdfminer.high_level import extract_text as pdf_extract
from pdfminer.pdfdocument import PDFDocument
from pdfminer.pdfpage import PDFPage
from pdfminer.pdfparser import PDFParser
from pdfminer.pdftypes import resolve1
from pdfminer.psparser import PSLiteral
from pdfminer.utils import decode_text

from resume_assistant.models.models import DocumentFormat, DocumentMetadata, ParsedDocument
from resume_assistant.utils.exceptions import ExtractionFailedError, UnsupportedFormatError
from resume_assistant.utils.logging_config import get_logger

logger = get_logger(__name__)

# Order matters: it is the order advertised to clients.
MIME_TYPES: Dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    "application/msword": DocumentFormat.DOC,
    "text/plain": DocumentFormat.TXT,
    "text/markdown": DocumentFormat.MD,
}

EXTENSIONS: Dict[str, DocumentFormat] = {fmt.value: fmt for fmt in DocumentFormat}

PDF_INFO_FIELDS = {
    "Title": "title",
    "Author": "author",
    "Subject": "subject",
    "Creator": "creator",
    "Producer": "producer",
}

_PDF_DATE = re.compile(
    r"^D?:?(\d{4})(\d{2})?(\d{2})?(\d{2})?(\d{2})?(\d{2})?"
    r"(?:([Zz+\-])(\d{2})?'?(\d{2})?'?)?"
)


def _extension(filename: str) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def classify(filename: str, mime_type: Optional[str] = None) -> DocumentFormat:
    """Pick the document format. An exact MIME match wins over the extension."""
    if mime_type in MIME_TYPES:
        return MIME_TYPES[mime_type]

    ext = _extension(filename)
    if ext in EXTENSIONS:
        return EXTENSIONS[ext]

    raise UnsupportedFormatError(
        f"Unsupported file extension: {ext or '(none)'}",
        filename=filename,
        mime_type=mime_type,
    )


def is_supported(filename: str, mime_type: Optional[str] = None) -> bool:
    try:
        classify(filename, mime_type)
        return True
    except UnsupportedFormatError:
        return False


def supported_extensions() -> List[str]:
    return list(EXTENSIONS)


def supported_mime_types() -> List[str]:
    return list(MIME_TYPES)

# -------- PDF --------

def _pdf_text(value: Any) -> Optional[str]:
    value = resolve1(value)
    if isinstance(value, bytes):
        return decode_text(value).strip() or None
    if isinstance(value, PSLiteral):
        return str(value.name)
    if isinstance(value, str):
        return value.strip() or None
    return None


def parse_pdf_date(raw: Optional[str]) -> Optional[datetime]:
    """Convert a PDF date string such as D:20240131093000+01'00' into a datetime."""
    if not raw:
        return None
    m = _PDF_DATE.match(raw.strip())
    if not m:
        return None
    year, month, day, hour, minute, second, sign, tz_h, tz_m = m.groups()
    try:
        tz = None
        if sign in ("Z", "z"):
            tz = timezone.utc
        elif sign in ("+", "-"):
            offset = timedelta(hours=int(tz_h or 0), minutes=int(tz_m or 0))
            tz = timezone(offset if sign == "+" else -offset)
        return datetime(
            int(year), int(month or 1), int(day or 1),
            int(hour or 0), int(minute or 0), int(second or 0),
            tzinfo=tz,
        )
    except ValueError:
        return None


def _pdf_metadata(data: bytes) -> DocumentMetadata:
    parser = PDFParser(io.BytesIO(data))
    doc = PDFDocument(parser)

    fields: Dict[str, Any] = {}
    for info in doc.info:
        info = resolve1(info) or {}
        for key, name in PDF_INFO_FIELDS.items():
            if key in info and name not in fields:
                text = _pdf_text(info[key])
                if text:
                    fields[name] = text
        if "CreationDate" in info and "creation_date" not in fields:
            fields["creation_date"] = parse_pdf_date(_pdf_text(info["CreationDate"]))
        if "ModDate" in info and "modification_date" not in fields:
            fields["modification_date"] = parse_pdf_date(_pdf_text(info["ModDate"]))

    fields["pages"] = sum(1 for _ in PDFPage.create_pages(doc))
    return DocumentMetadata(**fields)


def read_pdf(data: bytes) -> ParsedDocument:
    try:
        if not data:
            raise ValueError("empty document")
        metadata = _pdf_metadata(data)
        text = pdf_extract(io.BytesIO(data))
    except Exception as e:
        raise ExtractionFailedError(
            f"Failed to parse PDF: {e}", file_format=DocumentFormat.PDF.value, cause=e
        ) from e
    return ParsedDocument(content=text or "", format=DocumentFormat.PDF, metadata=metadata)

# -------- Word --------

def _docx_text(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells if cell.text)
    return "\n".join(lines)


def read_docx(data: bytes) -> ParsedDocument:
    try:
        text = _docx_text(data)
    except Exception as e:
        raise ExtractionFailedError(
            f"Failed to parse DOCX: {e}", file_format=DocumentFormat.DOCX.value, cause=e
        ) from e
    return ParsedDocument(content=text, format=DocumentFormat.DOCX)


def read_doc(data: bytes) -> ParsedDocument:
    # Only .doc files that are really OOXML packages decode here.
    try:
        text = _docx_text(data)
    except Exception as e:
        raise ExtractionFailedError(
            f"Failed to parse DOC: {e}. Note: Some older DOC formats may not be supported.",
            file_format=DocumentFormat.DOC.value,
            cause=e,
        ) from e
    return ParsedDocument(content=text, format=DocumentFormat.DOC)

# -------- Plain text --------

def read_txt(data: bytes) -> ParsedDocument:
    return ParsedDocument(content=data.decode("utf-8", errors="replace"), format=DocumentFormat.TXT)


def read_md(data: bytes) -> ParsedDocument:
    return ParsedDocument(content=data.decode("utf-8", errors="replace"), format=DocumentFormat.MD)


READERS: Dict[DocumentFormat, Callable[[bytes], ParsedDocument]] = {
    DocumentFormat.PDF: read_pdf,
    DocumentFormat.DOCX: read_docx,
    DocumentFormat.DOC: read_doc,
    DocumentFormat.TXT: read_txt,
    DocumentFormat.MD: read_md,
}


def extract(data: bytes, filename: str, mime_type: Optional[str] = None) -> ParsedDocument:
    """Classify an uploaded document and decode it to plain text."""
    fmt = classify(filename, mime_type)
    logger.debug(f"Extracting {filename!r} as {fmt.value} ({len(data)} bytes)")
    parsed = READERS[fmt](data)
    logger.info(f"Extracted {len(parsed.content)} characters from {filename!r} ({fmt.value})")
    return parsed
