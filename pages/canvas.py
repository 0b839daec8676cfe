"""Zeichenfläche `/canvas?id=<id>`: laden, bearbeiten, speichern & teilen."""

import streamlit as st
from streamlit.runtime.scriptrunner import get_script_run_ctx

from canvas_config import require_settings
from canvas_host import CanvasHost, DocumentState
from canvas_store import CanvasStore, init_connection
from ketcher_editor import KetcherEditor, copy_to_clipboard
from navigation import current_page_url, go_to_canvas, notify, resolve_canvas_id

st.set_page_config(page_title="Zeichenfläche", page_icon="🧪", layout="wide")

settings = require_settings()
store = CanvasStore(init_connection(settings.supabase_url, settings.supabase_key), settings.table)

# Angekommen: der Besuch von pages/new.py ist vorbei
st.session_state.pop("allocator", None)

canvas_id = resolve_canvas_id()

# Ein Host pro Zeichenfläche; andere ID -> alter Zustand wird verworfen
host = st.session_state.get("canvas_host")
if host is None or host.canvas_id != canvas_id:
    host = CanvasHost(
        store,
        canvas_id,
        navigate=go_to_canvas,
        notify=notify,
        share_url=lambda cid: settings.canvas_url(cid, current_page_url()),
        clipboard=copy_to_clipboard,
    )
    st.session_state["canvas_host"] = host

host.start()

# Nur in einem echten Skriptlauf mit Browser-Sitzung darf der Editor entstehen
if get_script_run_ctx() is not None:
    host.client_ready()

if host.state is DocumentState.LOAD_ERROR:
    st.error(host.error)
    st.stop()

if not host.can_mount:
    st.write("Laden…")
    st.stop()

if not host.mounted:
    host.mount(KetcherEditor(
        key=f"ketcher_{canvas_id or 'local'}",
        height=settings.editor_height,
        molecule_format=settings.molecule_format,
    ))

host.editor.render()

if canvas_id:
    st.caption("Link zu dieser Zeichenfläche:")
    st.code(settings.canvas_url(canvas_id, current_page_url()), language=None)
