"""Pydantic models for the analysis session and the HTTP API.

Provides type safety, validation at the remote-model boundary, and automatic
OpenAPI documentation.

Models:
    - AnalysisResult: Summary, insights, suggestions, chart data, statistics
    - ChartDataPoint / StatisticEntry: Dashboard building blocks
    - ChatMessage / ChatTurn: Conversation history entries
    - FileData: An ingested file and its extracted text
    - AnalyzeResponse / ChatRequest / ChatResponse: API payloads
"""

from insightstream.models.schemas import (
    AnalysisResult,
    AnalyzeResponse,
    ChartDataPoint,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatTurn,
    FileData,
    StatisticEntry,
)

__all__ = [
    "AnalysisResult",
    "AnalyzeResponse",
    "ChartDataPoint",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "FileData",
    "StatisticEntry",
]
