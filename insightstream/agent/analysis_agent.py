"""Analysis client: one-shot structured analysis of an uploaded file.

The model is asked for a strict JSON object and the reply is validated
against ``AnalysisResult`` before it reaches the session. Anything that does
not match the schema is treated as a failed call.
"""

import logging
import re

from agno.agent import Agent
from pydantic import ValidationError

from insightstream.agent.config import AgentConfig, create_model, get_agent_config
from insightstream.agent.errors import RemoteCallError
from insightstream.models.schemas import AnalysisResult

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

ANALYSIS_INSTRUCTIONS = [
    "Analyze the provided file content and respond with a single JSON object only, no markdown.",
    'Use exactly these keys: "summary" (string), "keyInsights" (array of strings), '
    '"suggestions" (array of strings), "chartData" (array of objects with "name" string, '
    '"value" number and optional "category" string), "statistics" (array of objects with '
    '"label" string, "value" string or number and optional "trend" of "up", "down" or "neutral").',
    "Keep the summary to a short paragraph and give 3 to 6 insights and suggestions.",
    "Pick chartData that best visualizes the main quantitative pattern; use at most 12 points.",
]


def extract_json(text: str) -> str:
    """Strip markdown fences and surrounding prose from a JSON reply."""
    cleaned = _FENCE_RE.sub("", text.strip())
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end < start:
        return cleaned
    return cleaned[start : end + 1]


class AnalysisClient:
    """Sends file content to the model and returns an ``AnalysisResult``.

    Single-shot: no retries and no conversation state.
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        return Agent(
            model=create_model(self._config, self._config.analysis_temperature),
            description="A senior data analyst that turns raw file content into dashboard-ready insights.",
            instructions=ANALYSIS_INSTRUCTIONS,
            markdown=False,
        )

    async def analyze(self, file_name: str, content: str) -> AnalysisResult:
        """Analyze extracted file text.

        Args:
            file_name: Original name of the uploaded file.
            content: Extracted text content.

        Returns:
            The validated analysis.

        Raises:
            RemoteCallError: On network or remote failure, or if the reply
                does not match the AnalysisResult shape.
        """
        prompt = f"File name: {file_name}\n\nFile content:\n{content}"

        try:
            response = await self._agent.arun(prompt)
        except Exception as e:
            logger.error(f"Analysis call failed for {file_name}: {e}")
            raise RemoteCallError(f"Analysis request failed: {e}") from e

        raw = response.content
        if not isinstance(raw, str) or not raw.strip():
            raise RemoteCallError("Analysis response was empty")

        try:
            result = AnalysisResult.model_validate_json(extract_json(raw))
        except ValidationError as e:
            logger.warning(f"Malformed analysis response for {file_name}: {e}")
            raise RemoteCallError("Analysis response did not match the expected format") from e

        logger.info(
            f"Analysis complete for {file_name}: "
            f"{len(result.key_insights)} insights, {len(result.chart_data)} chart points"
        )
        return result


_analysis_client: AnalysisClient | None = None


def get_analysis_client() -> AnalysisClient:
    """Get or create the global analysis client."""
    global _analysis_client
    if _analysis_client is None:
        _analysis_client = AnalysisClient()
    return _analysis_client
