"""Integration tests for the analyze and chat endpoints.

Requests go through the real FastAPI app, multipart parsing and file
extraction. The remote model clients are replaced via dependency overrides.
"""

import pytest
from httpx import AsyncClient

from insightstream.agent.errors import RemoteCallError
from insightstream.models.schemas import AnalyzeResponse, ChatResponse
from tests.stubs import StubAnalysisClient, StubChatClient


class TestHealth:
    """Tests for GET /health."""

    async def test_health_reports_service(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "insightstream"}


class TestAnalyzeEndpoint:
    """Integration tests for POST /analyze."""

    async def test_analyze_csv(
        self,
        async_client: AsyncClient,
        analysis_client: StubAnalysisClient,
        sample_csv_bytes: bytes,
    ) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("data.csv", sample_csv_bytes, "text/csv")},
        )

        assert response.status_code == 200
        data = AnalyzeResponse.model_validate(response.json())
        assert data.file_name == "data.csv"
        assert data.file_type == "csv"
        assert data.analysis.summary == "ok"
        assert analysis_client.calls == [("data.csv", "a,b\n1,2")]

    async def test_response_uses_camel_case_analysis_keys(
        self, async_client: AsyncClient, sample_csv_bytes: bytes
    ) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("data.csv", sample_csv_bytes, "text/csv")},
        )

        analysis = response.json()["analysis"]
        assert "keyInsights" in analysis
        assert "chartData" in analysis

    async def test_analyze_excel(
        self,
        async_client: AsyncClient,
        analysis_client: StubAnalysisClient,
        sample_xlsx_bytes: bytes,
    ) -> None:
        response = await async_client.post(
            "/analyze",
            files={
                "file": (
                    "book.xlsx",
                    sample_xlsx_bytes,
                    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                )
            },
        )

        assert response.status_code == 200
        assert response.json()["file_type"] == "xlsx"
        assert "north,10" in analysis_client.calls[0][1]

    async def test_analyze_pdf(
        self,
        async_client: AsyncClient,
        analysis_client: StubAnalysisClient,
        sample_pdf_bytes: bytes,
    ) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("report.pdf", sample_pdf_bytes, "application/pdf")},
        )

        assert response.status_code == 200
        assert "Quarterly revenue" in analysis_client.calls[0][1]

    async def test_reject_unsupported_format(
        self, async_client: AsyncClient, analysis_client: StubAnalysisClient
    ) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("report.docx", b"PK\x03\x04", "application/octet-stream")},
        )

        assert response.status_code == 400
        assert "Unsupported file format" in response.json()["detail"]
        assert analysis_client.calls == []

    async def test_reject_empty_file(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("empty.csv", b"", "text/csv")},
        )

        assert response.status_code == 400
        assert "Empty file" in response.json()["detail"]

    async def test_reject_fake_pdf(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("fake.pdf", b"just text", "application/pdf")},
        )

        assert response.status_code == 400
        assert "PDF" in response.json()["detail"]

    async def test_reject_oversized_file(self, async_client: AsyncClient) -> None:
        oversized_content = b"a,b\n" + (b"x" * (10 * 1024 * 1024 + 1024))

        response = await async_client.post(
            "/analyze",
            files={"file": ("large.csv", oversized_content, "text/csv")},
        )

        assert response.status_code == 413
        assert "10MB" in response.json()["detail"]

    async def test_reject_missing_filename(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/analyze",
            files={"file": ("", b"a,b\n1,2", "text/csv")},
        )

        assert response.status_code in (400, 422)

    async def test_missing_file_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/analyze")

        assert response.status_code == 422

    async def test_remote_failure_returns_502(
        self,
        async_client: AsyncClient,
        analysis_client: StubAnalysisClient,
        sample_csv_bytes: bytes,
    ) -> None:
        analysis_client.error = RemoteCallError("Analysis response did not match the expected format")

        response = await async_client.post(
            "/analyze",
            files={"file": ("data.csv", sample_csv_bytes, "text/csv")},
        )

        assert response.status_code == 502
        assert "expected format" in response.json()["detail"]

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/analyze")

        assert response.status_code == 405


class TestChatEndpoint:
    """Integration tests for POST /chat."""

    async def test_chat_returns_reply(
        self, async_client: AsyncClient, chat_client: StubChatClient
    ) -> None:
        response = await async_client.post(
            "/chat",
            json={
                "message": "  What is the total?  ",
                "content": "a,b\n1,2",
                "history": [
                    {"role": "user", "text": "hi"},
                    {"role": "model", "text": "hello"},
                ],
            },
        )

        assert response.status_code == 200
        assert ChatResponse.model_validate(response.json()).reply == "The total is 3."

        question, content, history = chat_client.calls[0]
        assert question == "What is the total?"
        assert content == "a,b\n1,2"
        assert [turn.role for turn in history] == ["user", "model"]

    async def test_history_is_optional(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/chat",
            json={"message": "total?", "content": "a,b\n1,2"},
        )

        assert response.status_code == 200

    @pytest.mark.parametrize("message", ["", "   "])
    async def test_blank_message_returns_422(self, async_client: AsyncClient, message: str) -> None:
        response = await async_client.post(
            "/chat",
            json={"message": message, "content": "a,b"},
        )

        assert response.status_code == 422

    async def test_invalid_role_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/chat",
            json={
                "message": "q",
                "content": "a,b",
                "history": [{"role": "system", "text": "x"}],
            },
        )

        assert response.status_code == 422

    async def test_remote_failure_returns_502(
        self, async_client: AsyncClient, chat_client: StubChatClient
    ) -> None:
        chat_client.error = RemoteCallError("rate limited")

        response = await async_client.post(
            "/chat",
            json={"message": "q", "content": "a,b"},
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "rate limited"

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/chat",
            json={"message": "q", "content": "a,b"},
            headers={"Origin": "http://localhost:3000"},
        )

        assert "access-control-allow-origin" in response.headers
