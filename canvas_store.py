import logging

import httpx
import streamlit as st
from postgrest.exceptions import APIError
from supabase import create_client, Client

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Ein Datenbankzugriff ist fehlgeschlagen."""


class CanvasNotFound(StoreError):
    """Keine Zeile mit dieser ID in der Tabelle."""


# ---------- Supabase Verbindung einrichten ----------
@st.cache_resource
def init_connection(url: str, key: str) -> Client:
    """Stellt die Verbindung zur Supabase-Datenbank her (wird gecached, um nicht bei jedem Rerun neu zu verbinden)."""
    logger.info("Verbinde mit Supabase unter %s", url)
    return create_client(url, key)


class CanvasStore:
    """Zugriff auf die Tabelle mit den Zeichenflächen (Spalten ``id`` und ``ket``).

    Keine Sperren, keine Wiederholungen: der letzte Schreibzugriff gewinnt.
    """

    def __init__(self, client: Client, table: str = "canvases"):
        self.client = client
        self.table = table

    def _execute(self, query, action: str):
        try:
            return query.execute()
        except (APIError, httpx.HTTPError) as exc:
            logger.error("Supabase-Fehler bei %s: %s", action, exc)
            raise StoreError(f"Datenbank-Fehler bei {action}: {exc}") from exc

    def create(self) -> str:
        """Legt eine leere Zeichenfläche an und gibt die vergebene ID zurück."""
        resp = self._execute(self.client.table(self.table).insert({}), "Anlegen")
        rows = resp.data or []
        if not rows or not rows[0].get("id"):
            logger.error("Keine ID von Supabase nach dem Einfügen erhalten")
            raise StoreError("Keine ID von Supabase nach dem Einfügen erhalten.")
        canvas_id = str(rows[0]["id"])
        logger.info("Zeichenfläche %s angelegt", canvas_id)
        return canvas_id

    def fetch(self, canvas_id: str) -> str:
        """Liest den gespeicherten ket-Inhalt. Leerer Inhalt -> ``""``."""
        query = self.client.table(self.table).select("ket").eq("id", canvas_id)
        resp = self._execute(query, "Laden")
        rows = resp.data or []
        if not rows:
            logger.warning("Zeichenfläche %s nicht gefunden", canvas_id)
            raise CanvasNotFound(f"Zeichenfläche {canvas_id} nicht gefunden.")
        ket = rows[0].get("ket") or ""
        logger.info("Zeichenfläche %s geladen (%d Zeichen)", canvas_id, len(ket))
        return ket

    def save(self, canvas_id: str, ket: str) -> None:
        """Überschreibt den ket-Inhalt einer bestehenden Zeichenfläche."""
        query = self.client.table(self.table).update({"ket": ket}).eq("id", canvas_id)
        resp = self._execute(query, "Speichern")
        # update liefert die geänderten Zeilen zurück
        if not resp.data:
            logger.warning("Speichern ohne Treffer für %s", canvas_id)
            raise CanvasNotFound(f"Zeichenfläche {canvas_id} nicht gefunden.")
        logger.info("Zeichenfläche %s gespeichert (%d Zeichen)", canvas_id, len(ket))
