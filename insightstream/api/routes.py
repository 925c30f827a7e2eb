"""Analyze and chat endpoints.

Stateless HTTP surface over the same ingestion and agent code the web UI
uses. Clients hold their own history and resend the extracted content.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from insightstream.agent.analysis_agent import AnalysisClient, get_analysis_client
from insightstream.agent.chat_agent import ChatClient, get_chat_client
from insightstream.agent.errors import RemoteCallError
from insightstream.models.schemas import AnalyzeResponse, ChatRequest, ChatResponse
from insightstream.parsing import (
    MAX_FILE_SIZE,
    FileParseError,
    detect_file_type,
    ingest_file,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_FILE_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_file(
    file: UploadFile,
    analysis_client: Annotated[AnalysisClient, Depends(get_analysis_client)],
) -> AnalyzeResponse:
    """Extract text from an uploaded file and analyze it.

    Raises:
        400: Missing filename, unsupported format, or unreadable file.
        413: File exceeds 10MB limit.
        502: The analysis model failed or returned malformed data.
    """
    if not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )
    filename = file.filename

    content = await _read_and_validate_size(file)

    try:
        text = await asyncio.to_thread(ingest_file, filename, content)
    except FileParseError as e:
        logger.warning(f"Ingestion failed for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    try:
        analysis = await analysis_client.analyze(filename, text)
    except RemoteCallError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return AnalyzeResponse(
        file_name=filename,
        file_type=detect_file_type(filename),
        analysis=analysis,
    )


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_client: Annotated[ChatClient, Depends(get_chat_client)],
) -> ChatResponse:
    """Answer a question grounded in previously extracted file content.

    Raises:
        502: The chat model failed.
    """
    try:
        reply = await chat_client.reply(request.message, request.content, request.history)
    except RemoteCallError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return ChatResponse(reply=reply)
