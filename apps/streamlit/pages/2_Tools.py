import streamlit as st

from osrs_oracle.config import load_config
from osrs_oracle.llm.credentials import EnvCredentialProvider
from osrs_oracle.llm.gemini_client import build_client
from osrs_oracle.tools import default_registry
from osrs_oracle.ui import render_sidebar, render_tool, session_state

st.set_page_config(page_title="Media Tools", layout="wide")
config = load_config()
credentials = EnvCredentialProvider(env_var=config.gemini.api_key_env)
render_sidebar(credentials)

registry = default_registry()
modes = registry.modes()
current = session_state.get_tool_mode()
mode = st.selectbox(
    "Tool",
    modes,
    index=modes.index(current) if current in modes else 0,
    format_func=lambda m: registry.get(m).title,
)
session_state.set_tool_mode(mode)

render_tool(registry.get(mode), build_client(config, credentials), config)
