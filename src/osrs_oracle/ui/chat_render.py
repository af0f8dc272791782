"""Chat rendering helpers."""

from __future__ import annotations

import asyncio
import html

import streamlit as st

from osrs_oracle.domain.models import ItemReference, Message, Role, TopicCategory
from osrs_oracle.markup import parse_segments, wiki_image_url
from osrs_oracle.services.chat_service import ChatSession
from osrs_oracle.ui.citations_render import render_sources

TOOLTIP_CSS = """
<style>
.osrs-item { position: relative; color: #ffff00; border-bottom: 1px dotted #ff981f; cursor: help; margin: 0 2px; }
.osrs-item .osrs-tip { visibility: hidden; opacity: 0; position: absolute; bottom: 100%; left: 50%;
  transform: translateX(-50%); width: 12rem; background: #39332d; border: 2px solid #5d5244; padding: 6px;
  font-size: 0.75rem; color: #d1d1d1; z-index: 50; text-align: center; transition: opacity 0.2s; }
.osrs-item:hover .osrs-tip { visibility: visible; opacity: 1; }
.osrs-tip img { max-height: 3rem; display: block; margin: 0 auto 4px auto; }
.osrs-tip b { color: #ff981f; display: block; }
</style>
"""


def item_html(ref: ItemReference) -> str:
    name = html.escape(ref.display_name)
    info = html.escape(ref.short_info)
    src = html.escape(wiki_image_url(ref.display_name))
    # A missing wiki image hides itself and leaves the text.
    img = f'<img src="{src}" alt="{name}" onerror="this.style.display=\'none\'"/>'
    return f'<span class="osrs-item">{name}<span class="osrs-tip">{img}<b>{name}</b>{info}</span></span>'


def message_html(text: str) -> str:
    rendered = []
    for segment in parse_segments(text):
        if isinstance(segment, ItemReference):
            rendered.append(item_html(segment))
        else:
            rendered.append(html.escape(segment, quote=False))
    return "".join(rendered)


def _render_controls(session: ChatSession) -> None:
    config = session.config
    st.sidebar.markdown("### Oracle settings")
    config.extended_reasoning_enabled = st.sidebar.checkbox(
        "Thinking Mode (Strategies)", value=config.extended_reasoning_enabled
    )
    # Thinking overrides search, so the toggle is greyed out rather than cleared.
    config.search_enabled = st.sidebar.checkbox(
        "Wiki Search", value=config.search_enabled, disabled=config.extended_reasoning_enabled
    )
    categories = list(TopicCategory)
    config.topic_category = st.sidebar.selectbox(
        "Category",
        categories,
        index=categories.index(config.topic_category),
        format_func=lambda c: c.label,
    )


def _render_message(session: ChatSession, message: Message, voice: str | None) -> None:
    is_user = message.role is Role.USER
    with st.chat_message("user" if is_user else "assistant"):
        st.caption("You" if is_user else "The Oracle")
        st.markdown(message_html(message.text), unsafe_allow_html=True)
        render_sources(message.sources)
        if is_user:
            return
        if message.audio is not None:
            st.audio(message.audio.to_wav_bytes(), format="audio/wav")
        elif st.button("🔊 Read aloud", key=f"tts-{message.id}"):
            asyncio.run(session.speak(message.id, voice=voice))
            st.rerun()


def render_chat(session: ChatSession, voice: str | None = None) -> None:
    st.markdown(TOOLTIP_CSS, unsafe_allow_html=True)
    _render_controls(session)

    for message in session.messages:
        _render_message(session, message, voice)

    placeholder = "Ask a complex strategy question..." if session.config.extended_reasoning_enabled else "Ask the Oracle..."
    prompt = st.chat_input(placeholder, disabled=session.busy)
    if prompt:
        spinner = (
            "Thinking deeply regarding your strategy..."
            if session.config.extended_reasoning_enabled
            else "Consulting the Wiki..."
        )
        with st.spinner(spinner):
            asyncio.run(session.submit(prompt))
        st.rerun()


__all__ = ["render_chat", "message_html", "item_html"]
