import streamlit as st

from osrs_oracle.config import load_config
from osrs_oracle.llm.credentials import EnvCredentialProvider
from osrs_oracle.llm.gemini_client import build_client
from osrs_oracle.ui import render_chat, render_sidebar, session_state

st.set_page_config(page_title="The Oracle", layout="wide")
config = load_config()
credentials = EnvCredentialProvider(env_var=config.gemini.api_key_env)
render_sidebar(credentials)

st.title("The Oracle")
if st.sidebar.button("New conversation"):
    session_state.reset_chat()

session = session_state.get_chat_session(build_client(config, credentials))
render_chat(session, voice=config.speech.voice)
