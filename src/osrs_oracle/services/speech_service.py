"""Text-to-speech for assistant messages."""

from __future__ import annotations

from typing import Optional

from osrs_oracle.domain.errors import GenerationFailure
from osrs_oracle.domain.models import AudioPayload
from osrs_oracle.llm.envelope import audio_payload, decode_envelope
from osrs_oracle.llm.gemini_client import GeminiClient
from osrs_oracle.markup import strip_markup

DEFAULT_VOICE = "Fenrir"


def build_speech_config(voice: str) -> dict:
    return {
        "responseModalities": ["AUDIO"],
        "speechConfig": {"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice}}},
    }


async def speak(client: GeminiClient, text: str, voice: Optional[str] = None) -> AudioPayload:
    clean = strip_markup(text).strip()
    if not clean:
        raise GenerationFailure("Nothing to speak")
    payload = await client.generate_content(
        client.config.tts_model,
        [{"parts": [{"text": clean}]}],
        generation_config=build_speech_config(voice or DEFAULT_VOICE),
    )
    return audio_payload(decode_envelope(payload))


__all__ = ["speak", "build_speech_config", "DEFAULT_VOICE"]
