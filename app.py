"""
Ketcher-Canvas – Einstiegsseite
-------------------------------
* Leitet sofort auf eine neue Zeichenfläche weiter (pages/new.py)
* Die eigentliche Arbeit passiert in pages/new.py und pages/canvas.py
* Start: `streamlit run app.py` (oder `python app.py`)
"""

import os
import sys

import streamlit as st
from streamlit.runtime.scriptrunner import get_script_run_ctx


def _bootstrap_streamlit_when_run_as_python_script() -> None:
    """Mit `python app.py` gestartet -> über `streamlit run` neu starten."""
    if __name__ != "__main__":
        return
    if get_script_run_ctx() is not None:
        return
    if len(sys.argv) > 1 and sys.argv[1] == "run":
        return

    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", os.path.abspath(__file__)]
    raise SystemExit(stcli.main())


_bootstrap_streamlit_when_run_as_python_script()

from canvas_config import require_settings  # noqa: E402
from navigation import go_to_new  # noqa: E402

st.set_page_config(page_title="Ketcher-Canvas", page_icon="🧪", layout="wide")

# Fehlende Zugangsdaten sollen schon hier auffallen, nicht erst beim Anlegen
require_settings()

# Jeder Besuch von / beginnt einen neuen Anlegeversuch, auch nach einem Fehler
st.session_state.pop("allocator", None)

st.write("Weiterleitung zu einer neuen Zeichenfläche…")
go_to_new()
