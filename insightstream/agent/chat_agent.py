"""Chat client for follow-up questions about an uploaded file.

The remote model keeps no conversation state. Every call re-sends the full
extracted file text as context together with the prior turns, so the reply
is always grounded in the same content the dashboard was built from.
"""

import logging

from agno.agent import Agent
from agno.models.message import Message
from agno.models.openai import OpenAIChat

from insightstream.agent.config import AgentConfig, create_model, get_agent_config
from insightstream.agent.errors import RemoteCallError
from insightstream.models.schemas import ChatTurn

logger = logging.getLogger(__name__)

# Agno uses OpenAI role names
_ROLE_MAP = {"user": "user", "model": "assistant"}


class ChatClient:
    """Answers questions about file content with an Agno agent."""

    def __init__(self, config: AgentConfig | None = None) -> None:
        self._config = config or get_agent_config()
        self._model: OpenAIChat = create_model(self._config, self._config.temperature)

    def _create_agent(self, content: str) -> Agent:
        """Create an agent grounded in one file's content.

        A fresh agent per call keeps concurrent sessions from sharing context.
        """
        return Agent(
            model=self._model,
            description="A data analyst answering questions about a file the user uploaded.",
            instructions=[
                "Answer using only the file content provided in the additional context.",
                "If the content does not contain the answer, say so.",
                "Be concise and quote figures from the data where relevant.",
            ],
            additional_context=f"<file_content>\n{content}\n</file_content>",
            markdown=True,
        )

    async def reply(self, question: str, content: str, history: list[ChatTurn]) -> str:
        """Get the model's answer to a question.

        Args:
            question: The user's current question.
            content: Extracted file text used as grounding context.
            history: Prior turns, oldest first, without the current question.

        Returns:
            Reply text; empty string if the model returned nothing.

        Raises:
            RemoteCallError: If the remote call fails.
        """
        messages = [Message(role=_ROLE_MAP[turn.role], content=turn.text) for turn in history]
        messages.append(Message(role="user", content=question))

        try:
            response = await self._create_agent(content).arun(messages)
        except Exception as e:
            logger.error(f"Chat call failed: {e}")
            raise RemoteCallError(str(e)) from e

        return response.content or ""


_chat_client: ChatClient | None = None


def get_chat_client() -> ChatClient:
    """Get or create the global chat client."""
    global _chat_client
    if _chat_client is None:
        _chat_client = ChatClient()
    return _chat_client
