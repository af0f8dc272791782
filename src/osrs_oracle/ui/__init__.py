"""Streamlit UI helpers for OSRS Oracle."""

from osrs_oracle.ui.sidebar import render_sidebar
from osrs_oracle.ui.chat_render import render_chat
from osrs_oracle.ui.citations_render import render_sources
from osrs_oracle.ui.tools_render import render_tool
from osrs_oracle.ui import session_state

__all__ = ["render_sidebar", "render_chat", "render_sources", "render_tool", "session_state"]
