"""Sidebar layout."""

from __future__ import annotations

import streamlit as st

from osrs_oracle.llm.credentials import CredentialProvider, has_credential

# Navigation targets relative to the Streamlit entrypoint
NAV_LINKS = [
    ("The Oracle (Chat)", "pages/1_Chat.py"),
    ("Media Tools", "pages/2_Tools.py"),
]


def _is_valid_page_path(path: str) -> bool:
    return path.startswith("pages/") and path.endswith(".py")


def _safe_page_link(path: str, label: str) -> None:
    if not _is_valid_page_path(path):
        st.sidebar.warning(f"Invalid page path for '{label}': {path}")
        return
    st.sidebar.page_link(path, label=label)


def render_sidebar(credentials: CredentialProvider) -> None:
    st.sidebar.title("OSRS Oracle")
    st.sidebar.caption("Gielinor's Smartest Guide")
    for label, path in NAV_LINKS:
        _safe_page_link(path, label=label)
    key_present = has_credential(credentials)
    st.sidebar.caption(f"Gemini API key: {'✅ present' if key_present else '❌ missing'}")
