"""Credential providers queried on every backend call."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Protocol

from osrs_oracle.domain.errors import AuthenticationFailure

FALLBACK_ENV = "API_KEY"


class CredentialProvider(Protocol):
    def get_api_key(self) -> str:
        ...


@dataclass
class EnvCredentialProvider:
    """Reads the key from the environment each time, so a rotated key is picked up."""

    env_var: str = "GEMINI_API_KEY"
    fallback_env_var: Optional[str] = FALLBACK_ENV

    def get_api_key(self) -> str:
        key = os.getenv(self.env_var)
        if not key and self.fallback_env_var:
            key = os.getenv(self.fallback_env_var)
        if not key or not key.strip():
            raise AuthenticationFailure(f"No API key found; set {self.env_var}.")
        return key.strip()


@dataclass
class StaticCredentialProvider:
    api_key: str = ""

    def get_api_key(self) -> str:
        if not self.api_key:
            raise AuthenticationFailure("No API key configured.")
        return self.api_key


def has_credential(provider: CredentialProvider) -> bool:
    try:
        provider.get_api_key()
    except AuthenticationFailure:
        return False
    return True


__all__ = ["CredentialProvider", "EnvCredentialProvider", "StaticCredentialProvider", "has_credential"]
