"""Pytest fixtures and shared test configuration.

Fixtures:
    - sample_csv_bytes / sample_xlsx_bytes / sample_pdf_bytes: In-memory files
    - analysis_client / chat_client: Stub remote clients
    - controller: SessionController wired to the stubs
    - async_client: HTTPX client for API testing with stubbed dependencies
"""

import io
from collections.abc import AsyncGenerator

import pandas as pd
import pytest
from httpx import ASGITransport, AsyncClient

from insightstream.agent.analysis_agent import get_analysis_client
from insightstream.agent.chat_agent import get_chat_client
from insightstream.api import create_app
from insightstream.session import SessionController
from tests.stubs import StubAnalysisClient, StubChatClient

PDF_TEXT = "Quarterly revenue grew 12 percent"


def build_pdf(text: str) -> bytes:
    """Build a single-page PDF showing one line of Helvetica text."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture
def sample_csv_bytes() -> bytes:
    return b"a,b\n1,2"


@pytest.fixture
def sample_xlsx_bytes() -> bytes:
    """Two-sheet workbook written with openpyxl."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame({"region": ["north", "south"], "sales": [10, 20]}).to_excel(
            writer, sheet_name="Sales", index=False
        )
        pd.DataFrame({"month": ["jan"], "cost": [5]}).to_excel(
            writer, sheet_name="Costs", index=False
        )
    return buffer.getvalue()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    return build_pdf(PDF_TEXT)


@pytest.fixture
def analysis_client() -> StubAnalysisClient:
    return StubAnalysisClient()


@pytest.fixture
def chat_client() -> StubChatClient:
    return StubChatClient()


@pytest.fixture
def controller(
    analysis_client: StubAnalysisClient, chat_client: StubChatClient
) -> SessionController:
    return SessionController(analysis_client=analysis_client, chat_client=chat_client)


@pytest.fixture
async def async_client(
    analysis_client: StubAnalysisClient, chat_client: StubChatClient
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the remote clients overridden.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app = create_app()
    app.dependency_overrides[get_analysis_client] = lambda: analysis_client
    app.dependency_overrides[get_chat_client] = lambda: chat_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
