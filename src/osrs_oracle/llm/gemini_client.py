"""Async client for the Gemini REST API."""

from __future__ import annotations

from typing import List, Optional, Tuple

import httpx

from osrs_oracle.config import GeminiConfig
from osrs_oracle.domain.errors import AuthenticationFailure, GenerationFailure, NetworkFailure
from osrs_oracle.domain.models import MediaPayload
from osrs_oracle.llm.credentials import CredentialProvider, EnvCredentialProvider
from osrs_oracle.logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-goog-api-key"


class GeminiClient:
    def __init__(
        self,
        credentials: Optional[CredentialProvider] = None,
        config: Optional[GeminiConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or GeminiConfig()
        self._credentials = credentials or EnvCredentialProvider(env_var=self._config.api_key_env)
        self._http = http_client

    @property
    def config(self) -> GeminiConfig:
        return self._config

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _send(self, method: str, url: str, *, json: Optional[dict] = None) -> httpx.Response:
        # Read per call so a key swapped mid-session is honoured.
        api_key = self._credentials.get_api_key()
        if not api_key.isascii():
            # httpx can only send ASCII header values; pasted keys sometimes carry zero-width characters.
            raise AuthenticationFailure("API key contains non-ASCII characters; re-copy it.")
        headers = {API_KEY_HEADER: api_key}
        try:
            if self._http is not None:
                response = await self._http.request(method, url, headers=headers, json=json, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout_s) as client:
                    response = await client.request(method, url, headers=headers, json=json, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"Gemini request failed: {exc}") from exc

        if response.status_code in (401, 403) or (response.status_code == 400 and "API_KEY_INVALID" in response.text):
            raise AuthenticationFailure(f"Gemini rejected the API key ({response.status_code}).")
        if response.status_code >= 400:
            raise NetworkFailure(f"Gemini returned {response.status_code}: {response.text}")
        return response

    async def _send_json(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        response = await self._send(method, self._url(path), json=payload)
        try:
            return response.json()
        except ValueError as exc:
            raise GenerationFailure(f"Invalid JSON from Gemini: {response.text[:200]}") from exc

    async def generate_content(
        self,
        model: str,
        contents: List[dict],
        *,
        system_instruction: Optional[str] = None,
        tools: Optional[List[dict]] = None,
        generation_config: Optional[dict] = None,
    ) -> dict:
        payload: dict = {"contents": contents}
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        if tools:
            payload["tools"] = tools
        if generation_config:
            payload["generationConfig"] = generation_config
        logger.debug("generate_content", extra={"model": model, "turns": len(contents), "tools": len(tools or [])})
        return await self._send_json("POST", f"models/{model}:generateContent", payload)

    async def start_video_generation(
        self,
        model: str,
        prompt: str,
        parameters: dict,
        image: Optional[MediaPayload] = None,
    ) -> dict:
        instance: dict = {"prompt": prompt}
        if image is not None:
            instance["image"] = {"bytesBase64Encoded": image.data, "mimeType": image.mime_type}
        payload = {"instances": [instance], "parameters": parameters}
        logger.info("Submitting video generation", extra={"model": model, "seeded": image is not None})
        return await self._send_json("POST", f"models/{model}:predictLongRunning", payload)

    async def get_operation(self, handle: str) -> dict:
        return await self._send_json("GET", handle)

    async def download(self, uri: str) -> Tuple[bytes, str]:
        response = await self._send("GET", uri)
        content_type = response.headers.get("content-type", "application/octet-stream").split(";")[0]
        return response.content, content_type


def build_client(settings=None, credentials: Optional[CredentialProvider] = None) -> GeminiClient:
    gemini = settings.gemini if settings is not None else GeminiConfig()
    provider = credentials or EnvCredentialProvider(env_var=gemini.api_key_env)
    return GeminiClient(provider, gemini)


__all__ = ["GeminiClient", "API_KEY_HEADER", "build_client"]
