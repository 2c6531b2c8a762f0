# core/settings.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# -------------------------------
# Defaults
# -------------------------------
DEFAULT_API_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbw8oPODBtBwUuQr9iMZhWCKBOIq9qxtHF7rDGT7qI072i7lAr2JTBwZBPXhbJFivV2J/exec"
)
DEFAULT_TIMEOUT_SEC = 20.0
RELOAD_DELAY_SECONDS = 1.5

_OVERRIDE_KEY = "api_url"


def default_settings_path() -> Path:
    env = os.getenv("AWB_SETTINGS_PATH", "").strip()
    if env:
        return Path(env)
    base = Path(__file__).resolve().parent.parent
    return base / "data" / "settings.json"


def _env_timeout() -> float:
    try:
        return float(os.getenv("AWB_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT_SEC)))
    except ValueError:
        return DEFAULT_TIMEOUT_SEC


# -------------------------------
# Persisted override
# -------------------------------
class SettingsStore:
    """
    JSON-backed user settings (survives restarts).
    A missing or corrupt file reads as empty settings.
    """

    def __init__(self, path: Optional[str | Path] = None):
        self.path = Path(path) if path else default_settings_path()

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get_api_url_override(self) -> str:
        return str(self.load().get(_OVERRIDE_KEY, "") or "").strip()

    def set_api_url_override(self, url: str) -> None:
        data = self.load()
        url = (url or "").strip()
        if url:
            data[_OVERRIDE_KEY] = url
        else:
            data.pop(_OVERRIDE_KEY, None)
        self.save(data)


# -------------------------------
# Resolution
# -------------------------------
def _secret_api_url(secrets: Optional[Mapping[str, Any]]) -> str:
    if not secrets:
        return ""
    try:
        return str(secrets.get("API_URL", "") or "").strip()
    except Exception:
        # st.secrets raises when no secrets.toml exists
        return ""


def resolve_api_url(
    store: Optional[SettingsStore] = None,
    secrets: Optional[Mapping[str, Any]] = None,
    default: str = DEFAULT_API_URL,
) -> str:
    """
    Endpoint priority:
      1) override saved from the settings screen
      2) deploy-time value: AWB_API_URL env var, then secrets["API_URL"]
      3) hard-coded default
    """
    if store is not None:
        override = store.get_api_url_override()
        if override:
            return override

    env_url = os.getenv("AWB_API_URL", "").strip()
    if env_url:
        return env_url

    secret_url = _secret_api_url(secrets)
    if secret_url:
        return secret_url

    return default


@dataclass(frozen=True)
class AppConfig:
    """Everything the sheet client needs; passed in explicitly, never read from globals."""
    api_url: str = ""
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    reload_delay_sec: float = RELOAD_DELAY_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url.strip())


def load_config(
    store: Optional[SettingsStore] = None,
    secrets: Optional[Mapping[str, Any]] = None,
) -> AppConfig:
    return AppConfig(
        api_url=resolve_api_url(store=store, secrets=secrets),
        timeout_sec=_env_timeout(),
    )
