"""Health checks for the Gemini backend."""

from __future__ import annotations

from dataclasses import dataclass

from osrs_oracle.domain.errors import OracleError
from osrs_oracle.llm.credentials import CredentialProvider, has_credential
from osrs_oracle.llm.gemini_client import GeminiClient


@dataclass
class HealthResult:
    ok: bool
    detail: dict

    def to_dict(self) -> dict:
        return {"ok": self.ok, **self.detail}


def check_credentials(provider: CredentialProvider) -> dict:
    present = has_credential(provider)
    detail = {"present": present}
    if not present:
        detail["error"] = "API key missing; set GEMINI_API_KEY."
    return HealthResult(ok=present, detail=detail).to_dict()


async def check_backend(client: GeminiClient) -> dict:
    model = client.config.search_model
    try:
        payload = await client.generate_content(model, [{"role": "user", "parts": [{"text": "ping"}]}])
    except OracleError as exc:
        return HealthResult(ok=False, detail={"model": model, "error_type": type(exc).__name__, "error": str(exc)}).to_dict()
    return HealthResult(ok=True, detail={"model": model, "candidates": len(payload.get("candidates") or [])}).to_dict()


async def run_all_checks(client: GeminiClient, provider: CredentialProvider, *, include_backend: bool = True) -> dict:
    results = {"credentials": check_credentials(provider)}
    if include_backend and results["credentials"]["ok"]:
        results["backend"] = await check_backend(client)
    return results


__all__ = ["HealthResult", "check_credentials", "check_backend", "run_all_checks"]
