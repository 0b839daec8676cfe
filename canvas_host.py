"""Lebenszyklus einer Zeichenfläche: Laden, Bereitschaft, Einbinden, Aktionen.

Der Editor wird nur eingebunden, wenn *beide* Bedingungen erfüllt sind:
das Dokument ist geladen (``DocumentState.LOADED``) und der Client ist bereit
(``client_ready()`` wurde signalisiert). Die Reihenfolge der beiden Ereignisse
ist beliebig.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from canvas_store import StoreError

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Zeichenfläche nicht gefunden oder konnte nicht geladen werden."
CREATE_ERROR_MESSAGE = "Neue Zeichenfläche konnte nicht erstellt werden."
SAVE_ERROR_MESSAGE = "Zeichenfläche konnte nicht gespeichert werden."
SHARE_SUCCESS_MESSAGE = "Zeichenfläche gespeichert! Der Link wird in die Zwischenablage kopiert."


class DocumentState(Enum):
    INIT = "init"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_ERROR = "load_error"


class CanvasHost:
    """Zustandsmaschine einer Seitenansicht ``/canvas?id=<id>``.

    ``navigate(id)`` wechselt zur Zeichenfläche ``id``, ``notify(level, text)``
    zeigt eine Meldung an, ``share_url(id)`` baut die teilbare Adresse und
    ``clipboard(text)`` kopiert sie.
    """

    def __init__(self, store, canvas_id: Optional[str], navigate: Callable,
                 notify: Callable, share_url: Callable, clipboard: Callable):
        self.store = store
        self.canvas_id = canvas_id
        self.navigate = navigate
        self.notify = notify
        self.share_url = share_url
        self.clipboard = clipboard

        self.state = DocumentState.INIT
        self.content = ""
        self.error: Optional[str] = None
        self.ready = False
        self.editor = None

    # --- Übergänge ----------------------------------------------------------
    def start(self) -> None:
        """Lädt das Dokument genau einmal."""
        if self.state is not DocumentState.INIT:
            return
        if not self.canvas_id:
            self.document_loaded("")
            return
        self.state = DocumentState.LOADING
        try:
            content = self.store.fetch(self.canvas_id)
        except StoreError as exc:
            logger.warning("Laden von %s fehlgeschlagen: %s", self.canvas_id, exc)
            self.load_failed(LOAD_ERROR_MESSAGE)
        else:
            self.document_loaded(content)

    def document_loaded(self, content: Optional[str]) -> None:
        self.state = DocumentState.LOADED
        self.content = content or ""
        if self.editor is not None:
            # bereits eingebunden: Inhalt nachschieben statt neu aufzubauen
            self.editor.set_serialized_content(self.content)

    def load_failed(self, message: str) -> None:
        self.state = DocumentState.LOAD_ERROR
        self.error = message

    def client_ready(self) -> None:
        if not self.ready:
            logger.debug("Client bereit für %s", self.canvas_id)
            self.ready = True

    @property
    def can_mount(self) -> bool:
        return self.state is DocumentState.LOADED and self.ready

    @property
    def mounted(self) -> bool:
        return self.editor is not None

    def mount(self, editor):
        """Bindet den Editor ein (höchstens einmal) und verdrahtet die Buttons."""
        if self.editor is not None:
            return self.editor
        if not self.can_mount:
            raise RuntimeError(
                f"Editor kann nicht eingebunden werden (Zustand {self.state.value}, bereit={self.ready})"
            )
        # Inhalt vor dem ersten Render setzen, Buttons erst wenn der Editor steht
        if self.content:
            editor.set_serialized_content(self.content)
        editor.on_init(self._wire_buttons)
        self.editor = editor
        logger.info("Editor für %s eingebunden", self.canvas_id)
        return editor

    def _wire_buttons(self, handle) -> None:
        # Handler bekommen den Editor direkt übergeben, kein globaler Verweis
        handle.subscribe("new-canvas", lambda editor: self.new_canvas())
        handle.subscribe("share", lambda editor: self.share(editor))

    # --- Aktionen -----------------------------------------------------------
    def new_canvas(self) -> Optional[str]:
        try:
            new_id = self.store.create()
        except StoreError as exc:
            logger.error("Neue Zeichenfläche fehlgeschlagen: %s", exc)
            self.notify("error", CREATE_ERROR_MESSAGE)
            return None
        self.navigate(new_id)
        return new_id

    def share(self, editor) -> Optional[str]:
        if not self.canvas_id:
            self.notify("error", SAVE_ERROR_MESSAGE)
            return None
        ket = editor.get_serialized_content()
        try:
            self.store.save(self.canvas_id, ket)
        except StoreError as exc:
            logger.error("Speichern von %s fehlgeschlagen: %s", self.canvas_id, exc)
            self.notify("error", SAVE_ERROR_MESSAGE)
            return None
        url = self.share_url(self.canvas_id)
        self.clipboard(url)
        self.notify("success", SHARE_SUCCESS_MESSAGE)
        return url


class DocumentAllocator:
    """Legt pro Seitenbesuch genau eine neue Zeichenfläche an."""

    def __init__(self, store, navigate: Callable, notify: Callable):
        self.store = store
        self.navigate = navigate
        self.notify = notify
        self.in_flight = False
        self.canvas_id: Optional[str] = None
        self.failed = False

    @property
    def done(self) -> bool:
        return self.canvas_id is not None or self.failed

    def allocate(self) -> Optional[str]:
        if self.in_flight or self.done:
            # kein zweites insert, auch nicht nach einem Fehler
            return self.canvas_id
        self.in_flight = True
        logger.info("Lege neue Zeichenfläche an")
        try:
            self.canvas_id = self.store.create()
        except StoreError as exc:
            logger.error("Fehler beim Anlegen der Zeichenfläche: %s", exc)
            self.failed = True
            self.notify("error", CREATE_ERROR_MESSAGE)
            return None
        finally:
            self.in_flight = False
        self.navigate(self.canvas_id)
        return self.canvas_id

    def reset(self) -> None:
        """Neuer Versuch, nur auf ausdrücklichen Wunsch des Nutzers."""
        self.canvas_id = None
        self.failed = False
