"""Session controller: the upload -> analysis -> chat state machine.

One controller owns one ``Session``. The view layer never mutates the
session directly; it calls ``select_file``, ``send_message`` or ``reset``
and re-renders when a subscribed listener is notified.

States:
    IDLE        no file loaded (possibly with ``last_error`` set)
    PROCESSING  ingestion and analysis in flight
    READY       analysis present, chat enabled; ``chat_loading`` while a
                chat call is in flight

Every ``select_file`` and ``reset`` bumps a generation counter. Work that
completes under an older generation is discarded, so a slow analysis or
chat reply can never land in a session the user has already replaced.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from insightstream.models.schemas import AnalysisResult, ChatMessage, ChatTurn, FileData
from insightstream.parsing import detect_file_type, ingest_file

logger = logging.getLogger(__name__)

DEFAULT_PROCESSING_ERROR = "An error occurred during file processing."
EMPTY_REPLY_TEXT = "Sorry, I could not process that."


class SessionStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    READY = "ready"


@dataclass
class Session:
    """Client-visible state for one uploaded file and its analysis and chat."""

    processing: bool = False
    file: FileData | None = None
    analysis: AnalysisResult | None = None
    chat_history: list[ChatMessage] = field(default_factory=list)
    chat_loading: bool = False
    last_error: str | None = None


class AnalysisService(Protocol):
    async def analyze(self, file_name: str, content: str) -> AnalysisResult: ...


class ChatService(Protocol):
    async def reply(self, question: str, content: str, history: list[ChatTurn]) -> str: ...


Listener = Callable[["SessionController"], None]


class SessionController:
    """Sequences ingestion, analysis and chat for a single session.

    Args:
        analysis_client: Service used for the structured analysis. Resolved
            lazily from the environment when omitted.
        chat_client: Service used for follow-up questions. Resolved lazily
            from the environment when omitted.
        ingest: Function turning (filename, bytes) into text.
    """

    def __init__(
        self,
        analysis_client: AnalysisService | None = None,
        chat_client: ChatService | None = None,
        ingest: Callable[[str, bytes], str] = ingest_file,
    ) -> None:
        self._analysis_client = analysis_client
        self._chat_client = chat_client
        self._ingest = ingest
        self._session = Session()
        self._listeners: list[Listener] = []
        self._generation = 0
        self._request_seq = 0
        self._pending_request: int | None = None

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        if self._session.processing:
            return SessionStatus.PROCESSING
        if self._session.file is not None and self._session.analysis is not None:
            return SessionStatus.READY
        return SessionStatus.IDLE

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _get_analysis_client(self) -> AnalysisService:
        if self._analysis_client is None:
            from insightstream.agent.analysis_agent import get_analysis_client

            self._analysis_client = get_analysis_client()
        return self._analysis_client

    def _get_chat_client(self) -> ChatService:
        if self._chat_client is None:
            from insightstream.agent.chat_agent import get_chat_client

            self._chat_client = get_chat_client()
        return self._chat_client

    async def select_file(self, name: str, data: bytes) -> None:
        """Ingest and analyze a newly selected file.

        The previous file, analysis and chat are discarded up front. On
        failure the session returns to IDLE with ``last_error`` set.
        """
        self._generation += 1
        token = self._generation
        self._pending_request = None
        self._session = Session(processing=True)
        self._notify()

        try:
            content = await asyncio.to_thread(self._ingest, name, data)
            file_data = FileData(name=name, content=content, type=detect_file_type(name))
            analysis = await self._get_analysis_client().analyze(name, content)
        except Exception as e:
            if token != self._generation:
                logger.info(f"Discarding failed processing of {name} from a replaced session")
                return
            logger.warning(f"Processing {name} failed: {e}")
            self._session = Session(last_error=str(e) or DEFAULT_PROCESSING_ERROR)
            self._notify()
        else:
            if token != self._generation:
                logger.info(f"Discarding analysis of {name} from a replaced session")
                return
            self._session = Session(file=file_data, analysis=analysis)
            logger.info(f"Session ready for {name}")
            self._notify()
        finally:
            # Cancellation skips both branches above
            if token == self._generation and self._session.processing:
                logger.warning(f"Processing {name} was cancelled")
                self._session = Session()
                self._notify()

    async def send_message(self, text: str) -> None:
        """Ask a question about the loaded file.

        Appends the user message immediately, then exactly one model message
        once the call settles. Does nothing when no file is loaded, the text
        is blank, or a reply is already pending.
        """
        file_data = self._session.file
        if file_data is None or not text.strip() or self._session.chat_loading:
            return

        token = self._generation
        self._request_seq += 1
        request_id = self._request_seq

        history = [message.to_turn() for message in self._session.chat_history]
        self._session.chat_history.append(ChatMessage(role="user", text=text))
        self._session.chat_loading = True
        self._pending_request = request_id
        self._notify()

        reply_text: str | None = None
        try:
            reply = await self._get_chat_client().reply(text, file_data.content, history)
            reply_text = reply or EMPTY_REPLY_TEXT
        except Exception as e:
            logger.warning(f"Chat request failed: {e}")
            reply_text = f"Error: {e}"
        finally:
            self._complete_reply(token, request_id, reply_text)

    def _complete_reply(self, token: int, request_id: int, text: str | None) -> None:
        """Settle a chat request at most once.

        ``text`` is None when the call was cancelled: the loading flag is
        cleared but no model message is appended.
        """
        if token != self._generation:
            logger.info("Discarding chat reply from a replaced session")
            return
        if self._pending_request != request_id:
            return

        self._pending_request = None
        if text is None:
            logger.warning("Chat request was cancelled")
        else:
            self._session.chat_history.append(ChatMessage(role="model", text=text))
        self._session.chat_loading = False
        self._notify()

    def reset(self) -> None:
        """Discard the file, analysis, chat history and error."""
        self._generation += 1
        self._pending_request = None
        self._session = Session()
        logger.info("Session reset")
        self._notify()
