# streamlit_app/components.py

import html
import re
from typing import Dict, List, Sequence, Tuple

import pandas as pd
import streamlit as st

from .utils import ChatMessage

NO_SECTION_TEXT = "No data available"

_LINE_STYLES = {
    "bullet": "padding-left:1rem;color:#1f2937;",
    "buy": "font-weight:700;color:#16a34a;",
    "sell": "font-weight:700;color:#dc2626;",
    "hold": "font-weight:700;color:#ca8a04;",
    "target": "font-weight:700;color:#2563eb;",
    "plain": "color:#1f2937;",
}


def classify_line(text: str) -> str:
    """
    Presentational kind of one analysis line.

    First match wins: bullet glyph, "label: value", BUY, SELL, HOLD, price target.
    """
    if text.startswith("•"):
        return "bullet"
    if ": " in text:
        return "label_value"
    if "BUY" in text:
        return "buy"
    if "SELL" in text:
        return "sell"
    if "HOLD" in text:
        return "hold"
    if "Target:" in text:
        return "target"
    return "plain"


def _inline_markdown(text: str) -> str:
    escaped = html.escape(text)
    return re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", escaped)


def line_html(text: str) -> str:
    kind = classify_line(text)
    if kind == "label_value":
        label, value = text.split(": ", 1)
        return (
            '<div style="display:flex;justify-content:space-between;padding:2px 0;">'
            f'<span style="font-weight:600;">{_inline_markdown(label)}:</span>'
            f"<span>{_inline_markdown(value)}</span></div>"
        )
    return f'<div style="padding:2px 0;{_LINE_STYLES[kind]}">{_inline_markdown(text)}</div>'


def format_blocks(content: str) -> List[Tuple[str, str]]:
    """
    Split analysis text into render blocks.

    Markdown table rows and headings are passed through untouched so Streamlit
    renders them; every other non-empty line becomes a styled HTML line.
    """
    blocks: List[Tuple[str, str]] = []
    table_rows: List[str] = []
    for raw in content.splitlines():
        line = raw.strip()
        if line.startswith("|"):
            table_rows.append(line)
            continue
        if table_rows:
            blocks.append(("markdown", "\n".join(table_rows)))
            table_rows = []
        if not line:
            continue
        if line.startswith("#"):
            blocks.append(("markdown", line))
        else:
            blocks.append(("html", line_html(line)))
    if table_rows:
        blocks.append(("markdown", "\n".join(table_rows)))
    return blocks


def split_symbol_sections(content: str, symbols: Sequence[str]) -> Tuple[Dict[str, str], str]:
    """
    For multi-symbol answers: the first paragraph mentioning each symbol, and the
    paragraphs that mention none of them.
    """
    sections = content.split("\n\n")
    by_symbol = {
        symbol: next((s for s in sections if symbol in s), NO_SECTION_TEXT)
        for symbol in symbols
    }
    remainder = "\n\n".join(s for s in sections if not any(symbol in s for symbol in symbols))
    return by_symbol, remainder


def render_analysis(content: str, symbols: Sequence[str] = ()) -> None:
    if len(symbols) > 1:
        by_symbol, content = split_symbol_sections(content, symbols)
        st.table(pd.DataFrame({symbol: [section] for symbol, section in by_symbol.items()}))

    for kind, block in format_blocks(content):
        if kind == "html":
            st.markdown(block, unsafe_allow_html=True)
        else:
            st.markdown(block)


def render_message(message: ChatMessage) -> None:
    """Chat bubble for one message."""
    with st.chat_message(message.role):
        speaker = "You" if message.role == "user" else "FinVoice"
        st.caption(f"{speaker} · {message.timestamp}")
        if message.role == "assistant":
            render_analysis(message.content, message.symbols or [])
        else:
            st.markdown(message.content)
