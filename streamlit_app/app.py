# streamlit_app/app.py

import hashlib
import logging

import streamlit as st
from dotenv import load_dotenv

from streamlit_app.components import render_message
from streamlit_app.utils import call_chat, messages_from_response

load_dotenv()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="FinVoice", page_icon="🎙️", layout="wide")

# Session state: append-only chat history and the last recording already sent
if "messages" not in st.session_state:
    st.session_state.messages = []
if "last_audio_digest" not in st.session_state:
    st.session_state.last_audio_digest = None

st.title("FinVoice")
st.caption("Voice-Powered Stock Analysis")

if not st.session_state.messages:
    st.info("Start recording to analyze stocks")

for message in st.session_state.messages:
    render_message(message)

recording = st.audio_input("Ask about a stock", key="recorder")

if recording is not None:
    audio_bytes = recording.getvalue()
    digest = hashlib.sha256(audio_bytes).hexdigest()
    # Reruns keep returning the same clip; upload each recording once
    if digest != st.session_state.last_audio_digest:
        st.session_state.last_audio_digest = digest
        with st.spinner("Processing your request..."):
            data = call_chat(audio_bytes, mime_type=recording.type or "audio/wav", filename=recording.name or "recording.wav")

        if data.get("success"):
            st.session_state.messages.extend(messages_from_response(data))
            st.rerun()
        else:
            logger.warning(f"Analysis request failed: {data.get('error')} ({data.get('details')})")
            st.error(data.get("error") or "The analysis request failed.")
