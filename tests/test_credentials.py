import pytest

from osrs_oracle.domain.errors import AuthenticationFailure
from osrs_oracle.llm.credentials import EnvCredentialProvider, has_credential


def test_env_provider_reads_key_on_each_call(monkeypatch):
    provider = EnvCredentialProvider()
    monkeypatch.setenv("GEMINI_API_KEY", "first")
    assert provider.get_api_key() == "first"
    monkeypatch.setenv("GEMINI_API_KEY", "rotated")
    assert provider.get_api_key() == "rotated"


def test_env_provider_falls_back(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", " legacy ")
    assert EnvCredentialProvider().get_api_key() == "legacy"


def test_env_provider_missing(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    provider = EnvCredentialProvider()
    with pytest.raises(AuthenticationFailure):
        provider.get_api_key()
    assert has_credential(provider) is False
