"""
Chat Orchestrator - multi-turn chat on top of the session store and the LLM gateway.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.exceptions import SessionNotFoundError, StoreError
from ..llm.gateway import LLMGateway
from ..models.session import DEFAULT_CONTEXT_WINDOW, Message, context_window
from ..storage.session_store import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are PromptRelay, a helpful AI assistant. Provide concise, helpful responses."
CHAT_MAX_TOKENS = 1000
CHAT_TEMPERATURE = 0.7


def build_prompt(window: List[Message], user_message: str) -> str:
    """Recent turns as ``role: content`` lines followed by the new message."""
    if not window:
        return user_message
    history = "\n".join(f"{m.role}: {m.content}" for m in window)
    return f"Previous conversation:\n{history}\n\nUser: {user_message}"


@dataclass
class ChatTurn:
    session_id: str
    user_message: Message
    assistant_message: Message
    model: str


class ChatOrchestrator:
    """
    Runs one chat turn: load session, window the history, call the LLM, then
    append the user message and the reply.

    The two appends are separate writes. If the second one fails the user
    message stays recorded without a reply and the error propagates.
    """

    def __init__(
        self,
        sessions: SessionStore,
        gateway: LLMGateway,
        context_limit: int = DEFAULT_CONTEXT_WINDOW,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ):
        self.sessions = sessions
        self.gateway = gateway
        self.context_limit = context_limit
        self.system_prompt = system_prompt

    async def chat(
        self,
        session_id: str,
        user_message: str,
        model: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> ChatTurn:
        """
        Process one user message in a session.

        Raises:
            SessionNotFoundError: no such session (checked before calling the LLM)
            ApiError, InvalidResponseError: LLM call failed, nothing was appended
            StoreError: an append failed
        """
        session = await self.sessions.find_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        window = context_window(session, self.context_limit)
        prompt = build_prompt(window, user_message)
        model = model or self.gateway.default_model

        logger.info(
            f"Chat turn in session {session_id}: {len(window)} context messages, model={model}"
        )

        result = await self.gateway.complete(
            prompt,
            model=model,
            system_prompt=system_prompt or self.system_prompt,
            max_tokens=CHAT_MAX_TOKENS,
            temperature=CHAT_TEMPERATURE,
        )

        user_turn = Message.user(user_message)
        assistant_turn = Message.assistant(result.content)

        await self._append(session_id, user_turn)
        try:
            await self._append(session_id, assistant_turn)
        except (StoreError, SessionNotFoundError) as e:
            logger.error(
                f"Assistant reply not recorded for session {session_id}; user message was kept",
                exc_info=True,
                extra={"extra_fields": {"session_id": session_id, "error": str(e)}}
            )
            raise

        return ChatTurn(
            session_id=session_id,
            user_message=user_turn,
            assistant_message=assistant_turn,
            model=model,
        )

    async def _append(self, session_id: str, message: Message) -> None:
        if not await self.sessions.add_message(session_id, message):
            raise SessionNotFoundError(session_id)
