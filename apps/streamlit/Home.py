import streamlit as st

from osrs_oracle.config import load_config
from osrs_oracle.llm.credentials import EnvCredentialProvider
from osrs_oracle.logging import configure_logging
from osrs_oracle.ui import render_sidebar

st.set_page_config(page_title="OSRS Oracle", layout="wide")
config = load_config()
configure_logging(config.logging.level)

render_sidebar(EnvCredentialProvider(env_var=config.gemini.api_key_env))

st.title("OSRS Oracle")
st.write("Gielinor's smartest guide, powered by Gemini.")

st.markdown(
    """
### Pages
- The Oracle (Chat): ask about diaries, PvP setups, bossing and skilling; items in answers show wiki tooltips
- Media Tools: concept art, magic image edits, Veo animations and screenshot/video analysis
"""
)
st.info("Set GEMINI_API_KEY in your environment or .env file before using the tools.")
