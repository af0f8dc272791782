import base64
import io
import wave

import pytest

from osrs_oracle.config import GeminiConfig
from osrs_oracle.domain.errors import GenerationFailure
from osrs_oracle.domain.models import AudioPayload
from osrs_oracle.services import speech_service


class FakeClient:
    def __init__(self, response):
        self.config = GeminiConfig()
        self.response = response
        self.calls = []

    async def generate_content(self, model, contents, **kwargs):
        self.calls.append({"model": model, "contents": contents, **kwargs})
        return self.response


AUDIO = {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "audio/L16;codec=pcm;rate=24000", "data": "AAAA"}}]}}]}


@pytest.mark.asyncio
async def test_speak_strips_markup_before_synthesis():
    client = FakeClient(AUDIO)
    await speech_service.speak(client, "Equip the [[Dragon dagger|Fast stab]]")
    call = client.calls[0]
    assert call["contents"] == [{"parts": [{"text": "Equip the Dragon dagger"}]}]
    assert call["generation_config"]["responseModalities"] == ["AUDIO"]
    voice = call["generation_config"]["speechConfig"]["voiceConfig"]["prebuiltVoiceConfig"]["voiceName"]
    assert voice == "Fenrir"


@pytest.mark.asyncio
async def test_speak_without_audio_fails():
    client = FakeClient({"candidates": [{"content": {"parts": [{"text": "no audio"}]}}]})
    with pytest.raises(GenerationFailure):
        await speech_service.speak(client, "hello")


@pytest.mark.asyncio
async def test_speak_empty_text_fails_without_call():
    client = FakeClient(AUDIO)
    with pytest.raises(GenerationFailure):
        await speech_service.speak(client, "  ")
    assert client.calls == []


def test_pcm_is_wrapped_as_wav():
    pcm = b"\x00\x01" * 100
    audio = AudioPayload(data=base64.b64encode(pcm).decode(), mime_type="audio/L16;codec=pcm;rate=16000")
    with wave.open(io.BytesIO(audio.to_wav_bytes())) as wav:
        assert wav.getframerate() == 16000
        assert wav.getnchannels() == 1
        assert wav.readframes(100) == pcm


def test_non_pcm_audio_passes_through():
    audio = AudioPayload(data=base64.b64encode(b"mp3").decode(), mime_type="audio/mpeg")
    assert audio.to_wav_bytes() == b"mp3"
