import logging

import pytest

from canvas_config import LOG_FORMAT, ConfigurationError, Settings, configure_logging, load_settings


def test_missing_credentials_is_fatal():
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(secrets={}, environ={})
    assert "SUPABASE_URL" in str(excinfo.value)
    assert "SUPABASE_KEY" in str(excinfo.value)


def test_missing_key_only():
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(secrets={"SUPABASE_URL": "https://x.supabase.co"}, environ={})
    assert "SUPABASE_URL" not in str(excinfo.value)


def test_secrets_win_over_environment():
    settings = load_settings(
        secrets={"SUPABASE_URL": "https://secrets.supabase.co", "SUPABASE_KEY": "k1"},
        environ={"SUPABASE_URL": "https://env.supabase.co", "SUPABASE_KEY": "k2"},
    )
    assert settings.supabase_url == "https://secrets.supabase.co"
    assert settings.supabase_key == "k1"


def test_next_public_names_from_environment():
    settings = load_settings(secrets={}, environ={
        "NEXT_PUBLIC_SUPABASE_URL": "https://env.supabase.co",
        "NEXT_PUBLIC_SUPABASE_ANON_KEY": "anon",
    })
    assert settings.supabase_url == "https://env.supabase.co"
    assert settings.supabase_key == "anon"


def test_defaults():
    settings = load_settings(secrets={}, environ={"SUPABASE_URL": "u", "SUPABASE_ANON_KEY": "k"})
    assert settings.table == "canvases"
    assert settings.molecule_format == "MOLFILE"
    assert settings.editor_height == 600
    assert settings.log_level == "INFO"


def test_optional_values():
    settings = load_settings(secrets={}, environ={
        "SUPABASE_URL": "u", "SUPABASE_KEY": "k",
        "CANVAS_TABLE": "drawings", "KETCHER_FORMAT": "smiles",
        "KETCHER_HEIGHT": "800", "LOG_LEVEL": "debug",
        "APP_BASE_URL": "https://canvas.example.org/",
    })
    assert settings.table == "drawings"
    assert settings.molecule_format == "SMILES"
    assert settings.editor_height == 800
    assert settings.log_level == "DEBUG"
    assert settings.canvas_url("abc") == "https://canvas.example.org/canvas?id=abc"


@pytest.mark.parametrize("name, value", [("KETCHER_HEIGHT", "gross"), ("KETCHER_FORMAT", "PNG")])
def test_invalid_optional_values(name, value):
    with pytest.raises(ConfigurationError):
        load_settings(secrets={}, environ={"SUPABASE_URL": "u", "SUPABASE_KEY": "k", name: value})


def test_canvas_url_default_base():
    settings = Settings(supabase_url="u", supabase_key="k")
    assert settings.canvas_url("id1") == "http://localhost:8501/canvas?id=id1"


def test_canvas_url_uses_browser_address():
    settings = Settings(supabase_url="u", supabase_key="k")
    assert settings.canvas_url("id1", "https://canvas.example.org/canvas") == \
        "https://canvas.example.org/canvas?id=id1"


def test_canvas_url_from_main_page_or_base_path():
    settings = Settings(supabase_url="u", supabase_key="k")
    assert settings.canvas_url("id1", "https://canvas.example.org/") == \
        "https://canvas.example.org/canvas?id=id1"
    assert settings.canvas_url("id1", "https://example.org/chem/canvas") == \
        "https://example.org/chem/canvas?id=id1"


def test_base_url_overrides_browser_address():
    settings = load_settings(secrets={}, environ={
        "SUPABASE_URL": "u", "SUPABASE_KEY": "k", "APP_BASE_URL": "https://public.example.org",
    })
    assert settings.canvas_url("id1", "http://10.0.0.5:8501/canvas") == \
        "https://public.example.org/canvas?id=id1"


def test_no_base_url_by_default():
    settings = load_settings(secrets={}, environ={"SUPABASE_URL": "u", "SUPABASE_KEY": "k"})
    assert settings.base_url is None


def test_configure_logging_takes_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(Settings(supabase_url="u", supabase_key="k", log_level="DEBUG"))
    configure_logging()

    assert [call["level"] for call in calls] == [logging.DEBUG, logging.INFO]
    assert calls[0]["format"] == LOG_FORMAT
