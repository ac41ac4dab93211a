import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch


@pytest.fixture
def test_app():
    from resume_assistant.main import app
    return app


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


class TestFileParseEndpoint:
    """POST /api/file/parse"""

    def test_parse_text_upload(self, client):
        """A plain text upload comes back verbatim with empty metadata"""
        files = {"file": ("resume.txt", b"John Doe, Software Engineer", "text/plain")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "John Doe, Software Engineer"
        assert data["metadata"] == {}
        assert data["filename"] == "resume.txt"
        assert data["size"] == 27
        assert data["type"] == "text/plain"
        assert "X-Request-ID" in response.headers

    def test_parse_markdown_by_extension(self, client):
        files = {"file": ("notes.md", "# Zoë\n".encode("utf-8"), "application/octet-stream")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 200
        assert response.json()["content"] == "# Zoë\n"

    def test_missing_file(self, client):
        response = client.post("/api/file/parse", data={"other": "x"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "No file provided"
        assert data["error_detail"]["error_type"] == "ValidationError"

    def test_unsupported_type(self, client):
        files = {"file": ("resume.rtf", b"{\\rtf1 hello}", "application/rtf")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 400
        message = response.json()["error"]
        assert message.startswith("Unsupported file type")
        for ext in ("pdf", "docx", "doc", "txt", "md"):
            assert ext in message

    @pytest.mark.parametrize("filename,mime_type", [
        ("resume.pdf", "application/pdf"),
        ("resume.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("resume.doc", "application/msword"),
        ("resume.txt", "text/plain"),
        ("resume.md", "text/markdown"),
    ])
    @patch("resume_assistant.routers.files.parsing.extract")
    @patch("resume_assistant.routers.files.MAX_UPLOAD_BYTES", 2048)
    def test_oversized_upload_is_rejected_before_extraction(self, mock_extract, client, filename, mime_type):
        files = {"file": (filename, b"x" * 2049, mime_type)}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "File size too large. Maximum size is 2KB."
        assert data["error_detail"]["details"] == {"size": 2049, "limit": 2048}
        mock_extract.assert_not_called()

    @patch("starlette.datastructures.UploadFile.read", new_callable=AsyncMock)
    @patch("resume_assistant.routers.files.MAX_UPLOAD_BYTES", 2048)
    def test_oversized_upload_is_not_read_into_memory(self, mock_read, client):
        files = {"file": ("resume.pdf", b"x" * 4096, "application/pdf")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 400
        assert response.json()["error_detail"]["details"]["size"] == 4096
        mock_read.assert_not_awaited()

    def test_error_is_a_display_string(self, client):
        files = {"file": ("a.exe", b"MZ", "application/octet-stream")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 400
        data = response.json()
        assert isinstance(data["error"], str)
        assert data["error"] == "Unsupported file type. Supported types: pdf, docx, doc, txt, md"
        assert data["error_detail"]["error_code"] == "UNSUPPORTED_FORMAT"

    @patch("resume_assistant.routers.files.MAX_UPLOAD_BYTES", 16)
    def test_upload_at_limit_is_accepted(self, client):
        files = {"file": ("resume.txt", b"x" * 16, "text/plain")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 200
        assert response.json()["size"] == 16

    def test_empty_pdf_fails_extraction(self, client):
        files = {"file": ("resume.pdf", b"", "application/pdf")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 500
        data = response.json()
        assert data["error_detail"]["error_type"] == "ExtractionFailedError"
        assert data["error_detail"]["details"]["format"] == "pdf"
        assert data["error"].startswith("Failed to parse PDF")

    def test_pdf_metadata_is_reported(self, client, pdf_bytes):
        files = {"file": ("resume.pdf", pdf_bytes, "application/pdf")}
        response = client.post("/api/file/parse", files=files)

        assert response.status_code == 200
        data = response.json()
        assert "Hello Resume" in data["content"]
        assert data["metadata"]["pages"] == 1
        assert data["metadata"]["title"] == "Jane Resume"
        assert data["metadata"]["creation_date"] == "2024-01-31T09:30:00Z"


class TestFileCapabilities:
    """GET /api/file/parse"""

    def test_capabilities(self, client):
        response = client.get("/api/file/parse")

        assert response.status_code == 200
        assert response.json() == {
            "supportedExtensions": ["pdf", "docx", "doc", "txt", "md"],
            "supportedMimeTypes": [
                "application/pdf",
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                "application/msword",
                "text/plain",
                "text/markdown",
            ],
            "maxFileSize": "10MB",
        }

    @patch("resume_assistant.routers.files.MAX_UPLOAD_BYTES", 5 * 1024 * 1024)
    def test_capabilities_follow_configured_limit(self, client):
        response = client.get("/api/file/parse")
        assert response.json()["maxFileSize"] == "5MB"


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
