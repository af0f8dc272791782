"""Helpers for Streamlit session state."""

from __future__ import annotations

import streamlit as st

from osrs_oracle.domain.models import AppMode, RequestConfig
from osrs_oracle.llm.gemini_client import GeminiClient
from osrs_oracle.services.chat_service import ChatSession

CHAT_SESSION_KEY = "chat_session"
TOOL_MODE_KEY = "tool_mode"


def get_chat_session(client: GeminiClient) -> ChatSession:
    if CHAT_SESSION_KEY not in st.session_state:
        st.session_state[CHAT_SESSION_KEY] = ChatSession(client, RequestConfig())
    return st.session_state[CHAT_SESSION_KEY]


def reset_chat() -> None:
    st.session_state.pop(CHAT_SESSION_KEY, None)


def get_tool_mode() -> AppMode:
    return st.session_state.get(TOOL_MODE_KEY, AppMode.IMAGE_GEN)


def set_tool_mode(mode: AppMode) -> None:
    st.session_state[TOOL_MODE_KEY] = mode
