"""Ketcher-Editor als Streamlit-Komponente mit eigener Werkzeugleiste.

Der Editor selbst (Zeichnen, Serialisierung) steckt vollständig in
``streamlit_ketcher``. Diese Klasse legt nur die Schnittstelle darum, die
``CanvasHost`` braucht: Inhalt lesen/setzen, Buttons abonnieren, Init-Signal.
"""

import json
import logging
from typing import Callable, Dict, List, Tuple

import streamlit as st
from streamlit_ketcher import st_ketcher

logger = logging.getLogger(__name__)

# (id, Beschriftung) der eigenen Toolbar-Buttons
DEFAULT_BUTTONS = (
    ("new-canvas", "➕ Neue Zeichenfläche"),
    ("share", "🔗 Teilen"),
)


class KetcherEditor:
    def __init__(self, key: str, height: int = 600, molecule_format: str = "MOLFILE",
                 buttons: Tuple[Tuple[str, str], ...] = DEFAULT_BUTTONS):
        self.key = key
        self.height = height
        self.molecule_format = molecule_format
        self.buttons = buttons
        self._content = ""
        self._widget_value = None
        self._listeners: Dict[str, List[Callable]] = {}
        self._init_callbacks: List[Callable] = []
        self.initialized = False

    # --- Schnittstelle für CanvasHost ---------------------------------------
    def get_serialized_content(self) -> str:
        return self._content

    def set_serialized_content(self, text: str) -> None:
        # Geht beim nächsten Render als neuer Wert an dasselbe Widget (gleicher
        # Key, kein Neuaufbau); ein alter Widget-Wert überschreibt ihn nicht
        self._content = text or ""

    def subscribe(self, button_id: str, callback: Callable) -> None:
        self._listeners.setdefault(button_id, []).append(callback)

    def on_init(self, callback: Callable) -> None:
        if self.initialized:
            callback(self)
        else:
            self._init_callbacks.append(callback)

    def press(self, button_id: str) -> None:
        """Leitet einen Button-Klick an alle Abonnenten weiter."""
        listeners = self._listeners.get(button_id)
        if not listeners:
            logger.warning("Kein Handler für Button %r", button_id)
            return
        logger.info("Button %r gedrückt", button_id)
        for callback in listeners:
            callback(self)

    # --- Rendering ----------------------------------------------------------
    def render(self) -> str:
        """Zeichnet Werkzeugleiste und Editor; gibt den aktuellen Inhalt zurück."""
        cols = st.columns(len(self.buttons) + 1)
        pressed = []
        for col, (button_id, label) in zip(cols, self.buttons):
            if col.button(label, key=f"{self.key}_{button_id}"):
                pressed.append(button_id)

        value = st_ketcher(
            self._content,
            height=self.height,
            molecule_format=self.molecule_format,
            key=self.key,
        )
        # Das Widget ist über den Key gebunden und liefert seinen letzten Wert
        # immer wieder; übernommen wird nur, was sich seit dem letzten Render
        # im Browser geändert hat (neues "Apply")
        if value is not None and value != self._widget_value:
            self._widget_value = value
            self._content = value

        if not self.initialized:
            self.initialized = True
            callbacks, self._init_callbacks = self._init_callbacks, []
            for callback in callbacks:
                callback(self)

        # Erst nach dem Editor auswerten, damit die Handler den neuesten Inhalt sehen
        for button_id in pressed:
            self.press(button_id)
        return self._content


def copy_to_clipboard(text: str) -> None:
    """Kopiert Text über ein kleines Browser-Skript in die Zwischenablage.

    Das Skript läuft im iframe der Komponente und schreibt über das
    Elternfenster; schlägt das fehl (keine Berechtigung), landet der Fehler
    in der Browser-Konsole. Die Adresse steht zusätzlich als ``st.code`` auf
    der Seite.
    """
    payload = json.dumps(text)
    st.iframe(
        "<script>"
        f"window.parent.navigator.clipboard.writeText({payload})"
        ".catch((err) => console.error('Zwischenablage nicht verfügbar:', err));"
        "</script>",
        height=1,
    )
