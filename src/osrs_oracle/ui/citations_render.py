"""Citations rendering helper."""

from __future__ import annotations

import streamlit as st


def render_sources(sources):
    if not sources:
        return
    st.markdown("**Wiki Sources:**")
    for source in sources:
        title = source.title or source.uri or "web source"
        if source.uri:
            st.markdown(f"- [{title}]({source.uri})")
        else:
            st.markdown(f"- {title}")
