from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ChatRole = Literal["user", "model"]
Trend = Literal["up", "down", "neutral"]


class ChartDataPoint(BaseModel):
    """A single bar in the dashboard chart.

    Attributes:
        name: Label on the category axis.
        value: Numeric value plotted for this point; numeric strings are rejected.
        category: Optional grouping label.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    value: float = Field(strict=True)
    category: str | None = None


class StatisticEntry(BaseModel):
    """A headline figure shown as a dashboard card.

    Attributes:
        label: Short description of the figure.
        value: Displayed value, either preformatted text or a number.
        trend: Optional direction indicator (up, down, neutral).
    """

    model_config = ConfigDict(frozen=True)

    label: str
    value: str | int | float
    trend: Trend | None = None


class AnalysisResult(BaseModel):
    """Structured analysis returned by the remote model.

    Serialized with camelCase keys (``keyInsights``, ``chartData``) to match
    the JSON shape the model is asked to produce. Every key is required so a
    partial reply is rejected.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str
    key_insights: list[str] = Field(alias="keyInsights")
    suggestions: list[str]
    chart_data: list[ChartDataPoint] = Field(alias="chartData")
    statistics: list[StatisticEntry]


class ChatTurn(BaseModel):
    """A prior conversation turn as sent to the chat model."""

    role: ChatRole
    text: str


class ChatMessage(BaseModel):
    """A message in the session chat history.

    Attributes:
        role: Author of the message (user or model).
        text: Message body.
        timestamp: Creation time.
    """

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_turn(self) -> ChatTurn:
        return ChatTurn(role=self.role, text=self.text)


class FileData(BaseModel):
    """An ingested file: original name, extracted text and detected type."""

    model_config = ConfigDict(frozen=True)

    name: str
    content: str
    type: str


class AnalyzeResponse(BaseModel):
    """Response from the analyze endpoint.

    Attributes:
        file_name: Name of the uploaded file.
        file_type: Detected extension (csv, xlsx, xls, pdf).
        analysis: The structured analysis of the file content.
    """

    file_name: str
    file_type: str
    analysis: AnalysisResult


class ChatRequest(BaseModel):
    """Request payload for the stateless chat endpoint.

    Attributes:
        message: User's question about the file.
        content: Extracted file text used as grounding context.
        history: Prior turns of the conversation, oldest first.
    """

    message: str = Field(..., min_length=1)
    content: str
    history: list[ChatTurn] = Field(default_factory=list)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Reply text from the chat model."""

    reply: str
