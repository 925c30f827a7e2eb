"""Agno agents for the remote analysis and chat calls.

Responsibilities:
    - Model construction from environment configuration
    - Structured file analysis validated against AnalysisResult
    - Grounded follow-up chat with client-side history
    - Uniform RemoteCallError for every remote failure

Maintains clean separation from the HTTP and UI layers.
"""

from insightstream.agent.analysis_agent import AnalysisClient, get_analysis_client
from insightstream.agent.chat_agent import ChatClient, get_chat_client
from insightstream.agent.config import AgentConfig, get_agent_config
from insightstream.agent.errors import RemoteCallError

__all__ = [
    "AgentConfig",
    "AnalysisClient",
    "ChatClient",
    "RemoteCallError",
    "get_agent_config",
    "get_analysis_client",
    "get_chat_client",
]
