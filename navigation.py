"""Seitenwechsel und Meldungen, gemeinsam für alle Seiten."""

import streamlit as st

NEW_PAGE = "pages/new.py"
CANVAS_PAGE = "pages/canvas.py"
PENDING_KEY = "pending_canvas_id"


def go_to_canvas(canvas_id: str) -> None:
    # switch_page verwirft die Query-Parameter, daher über session_state
    st.session_state[PENDING_KEY] = canvas_id
    st.switch_page(CANVAS_PAGE)


def go_to_new() -> None:
    st.switch_page(NEW_PAGE)


def resolve_canvas_id():
    """ID der anzuzeigenden Zeichenfläche: frische Navigation vor ?id=."""
    canvas_id = st.session_state.pop(PENDING_KEY, None) or st.query_params.get("id")
    if canvas_id:
        st.query_params["id"] = canvas_id
    return canvas_id


def notify(level: str, text: str) -> None:
    {"error": st.error, "success": st.success, "warning": st.warning}.get(level, st.info)(text)


def current_page_url():
    """Adresse der Seite im Browser des Nutzers (ohne Query-Parameter)."""
    return st.context.url or None
