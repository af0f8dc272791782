"""Chat turns against Gemini and the session-scoped conversation log."""

from __future__ import annotations

from typing import List, Optional

from osrs_oracle.config import GeminiConfig
from osrs_oracle.domain.errors import OracleError
from osrs_oracle.domain.models import ChatAnswer, ConversationTurn, Message, RequestConfig, Role
from osrs_oracle.llm.envelope import chat_answer, decode_envelope
from osrs_oracle.llm.gemini_client import GeminiClient
from osrs_oracle.llm.selector import (
    apply_prompt,
    build_generation_config,
    build_system_instruction,
    select_target,
)
from osrs_oracle.logging import get_logger
from osrs_oracle.services import speech_service
from osrs_oracle.services.conversation import to_history, to_wire

logger = get_logger(__name__)

WELCOME_TEXT = (
    "Welcome, adventurer. I am the Oracle. Ask me about your diaries, PvP rotations, or boss mechanics. "
    "I shall consult the ancient texts (Wiki) for you."
)
API_ERROR_TEXT = "The connection to the servers is weak (API Error). Please try again."


async def submit_chat(
    client: GeminiClient,
    text: str,
    config: RequestConfig,
    history: List[ConversationTurn],
    gemini: Optional[GeminiConfig] = None,
) -> ChatAnswer:
    gemini = gemini or client.config
    target = select_target(config, gemini)
    contents = to_wire(history) + [{"role": "user", "parts": [{"text": apply_prompt(target, text)}]}]
    payload = await client.generate_content(
        target.model,
        contents,
        system_instruction=build_system_instruction(config.topic_category),
        tools=target.tools or None,
        generation_config=build_generation_config(target) or None,
    )
    answer = chat_answer(decode_envelope(payload))
    logger.info(
        "Chat turn answered",
        extra={"model": target.model, "search": target.uses_search, "sources": len(answer.sources)},
    )
    return answer


class ChatSession:
    """Conversation log for one session; nothing here outlives the process."""

    def __init__(self, client: GeminiClient, config: Optional[RequestConfig] = None, *, welcome: bool = True):
        self.client = client
        self.config = config or RequestConfig()
        self.messages: List[Message] = []
        self._in_flight = False
        if welcome:
            self.messages.append(Message(role=Role.ASSISTANT, text=WELCOME_TEXT))

    @property
    def busy(self) -> bool:
        return self._in_flight

    def get_message(self, message_id: str) -> Optional[Message]:
        return next((m for m in self.messages if m.id == message_id), None)

    async def submit(self, text: str) -> Optional[Message]:
        """Send ``text`` and append the reply; failures become a placeholder reply."""
        if not text or not text.strip():
            return None
        if self._in_flight:
            logger.warning("Ignoring submission while a previous one is in flight")
            return None

        history = to_history(self.messages)
        self.messages.append(Message(role=Role.USER, text=text))
        self._in_flight = True
        try:
            answer = await submit_chat(self.client, text, self.config, history)
            reply = Message(role=Role.ASSISTANT, text=answer.text, sources=answer.sources)
        except OracleError as exc:
            logger.error("Chat turn failed", extra={"error_type": type(exc).__name__, "error": str(exc)})
            reply = Message(role=Role.ASSISTANT, text=API_ERROR_TEXT)
        except Exception:
            # The log must always end with a reply, whatever went wrong.
            logger.exception("Chat turn failed unexpectedly")
            reply = Message(role=Role.ASSISTANT, text=API_ERROR_TEXT)
        finally:
            self._in_flight = False
        self.messages.append(reply)
        return reply

    async def speak(self, message_id: str, voice: Optional[str] = None) -> Optional[Message]:
        message = self.get_message(message_id)
        if message is None:
            return None
        try:
            audio = await speech_service.speak(self.client, message.text, voice=voice)
        except OracleError as exc:
            logger.warning("TTS failed", extra={"message_id": message_id, "error": str(exc)})
            return message
        message.attach_audio(audio)
        return message


__all__ = ["ChatSession", "submit_chat", "WELCOME_TEXT", "API_ERROR_TEXT"]
