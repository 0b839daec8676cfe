"""Legt eine neue, leere Zeichenfläche an und leitet zu ihr weiter."""

import streamlit as st

from canvas_config import require_settings
from canvas_host import DocumentAllocator
from canvas_store import CanvasStore, init_connection
from navigation import go_to_canvas, notify

st.set_page_config(page_title="Neue Zeichenfläche", page_icon="🧪", layout="wide")

settings = require_settings()
store = CanvasStore(init_connection(settings.supabase_url, settings.supabase_key), settings.table)

# Ein Allocator pro Seitenbesuch; pages/canvas.py räumt ihn beim Ankommen weg
allocator = st.session_state.get("allocator")
if allocator is None:
    allocator = DocumentAllocator(store, navigate=go_to_canvas, notify=notify)
    st.session_state["allocator"] = allocator

st.write("Neue Zeichenfläche wird erstellt…")
allocator.allocate()

# Kein automatischer Neuversuch, nur per Klick
if allocator.failed and st.button("🔄 Erneut versuchen"):
    allocator.reset()
    st.rerun()
