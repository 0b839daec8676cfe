"""Konfiguration der Canvas-App: Supabase-Zugang, Editor-Optionen, Logging.

Werte kommen zuerst aus ``st.secrets`` (``.streamlit/secrets.toml``), danach
aus Umgebungsvariablen. Fehlen URL oder Key, ist das ein fataler Fehler.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

import streamlit as st
from streamlit.errors import StreamlitAPIException

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MOLECULE_FORMATS = ("MOLFILE", "SMILES")
DEFAULT_BASE_URL = "http://localhost:8501"

# Erster Treffer gewinnt; die NEXT_PUBLIC_-Namen erlauben eine bestehende .env weiterzuverwenden
URL_KEYS = ("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
KEY_KEYS = ("SUPABASE_KEY", "SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")


class ConfigurationError(RuntimeError):
    """Konfiguration unvollständig oder ungültig. Wird nicht abgefangen."""


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    table: str = "canvases"
    base_url: Optional[str] = None
    molecule_format: str = "MOLFILE"
    editor_height: int = 600
    log_level: str = "INFO"

    def canvas_url(self, canvas_id: str, page_url: Optional[str] = None) -> str:
        """Teilbare Adresse einer Zeichenfläche.

        ``APP_BASE_URL`` hat Vorrang; sonst zählt die Adresse, unter der die
        Seite im Browser gerade aufgerufen ist (``st.context.url``).
        """
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/canvas?id={canvas_id}"
        parts = urlsplit(page_url or DEFAULT_BASE_URL)
        path = parts.path.rstrip("/")
        if not path.endswith("/canvas"):
            path += "/canvas"
        return urlunsplit((parts.scheme, parts.netloc, path, urlencode({"id": canvas_id}), ""))


def _streamlit_secrets() -> dict:
    try:
        return dict(st.secrets)
    except (FileNotFoundError, StreamlitAPIException):
        # keine secrets.toml vorhanden -> nur Umgebung
        return {}


def _lookup(names, secrets: Mapping, environ: Mapping) -> Optional[str]:
    for name in names:
        value = secrets.get(name) or environ.get(name)
        if value:
            return str(value)
    return None


def load_settings(secrets: Optional[Mapping] = None, environ: Optional[Mapping] = None) -> Settings:
    """Liest die Einstellungen. Wirft ``ConfigurationError`` bei fehlenden Zugangsdaten."""
    if secrets is None:
        secrets = _streamlit_secrets()
    if environ is None:
        environ = os.environ

    url = _lookup(URL_KEYS, secrets, environ)
    key = _lookup(KEY_KEYS, secrets, environ)
    missing = [names[0] for names, value in ((URL_KEYS, url), (KEY_KEYS, key)) if not value]
    if missing:
        raise ConfigurationError(
            "Supabase-Zugangsdaten fehlen: " + ", ".join(missing)
            + ". Bitte .streamlit/secrets.toml oder Umgebungsvariablen setzen."
        )

    molecule_format = (_lookup(("KETCHER_FORMAT",), secrets, environ) or "MOLFILE").upper()
    if molecule_format not in MOLECULE_FORMATS:
        raise ConfigurationError(f"Unbekanntes KETCHER_FORMAT: {molecule_format}")

    height = _lookup(("KETCHER_HEIGHT",), secrets, environ) or "600"
    try:
        editor_height = int(height)
    except ValueError as exc:
        raise ConfigurationError(f"KETCHER_HEIGHT ist keine Zahl: {height!r}") from exc

    return Settings(
        supabase_url=url,
        supabase_key=key,
        table=_lookup(("CANVAS_TABLE",), secrets, environ) or "canvases",
        base_url=_lookup(("APP_BASE_URL",), secrets, environ),
        molecule_format=molecule_format,
        editor_height=editor_height,
        log_level=(_lookup(("LOG_LEVEL",), secrets, environ) or "INFO").upper(),
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    level = settings.log_level if settings else "INFO"
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def require_settings() -> Settings:
    """Für die Seiten: Einstellungen laden oder die Seite mit Fehlermeldung anhalten."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Konfigurationsfehler: %s", exc)
        st.error(str(exc))
        st.stop()
        # ohne Skriptlauf (z.B. beim Import) kehrt st.stop() zurück
        raise
    configure_logging(settings)
    return settings
