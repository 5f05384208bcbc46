"""Settings management for the reconciler CLI."""
import json
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Platform-appropriate settings directory
# ---------------------------------------------------------------------------

def settings_dir() -> Path:
    """Return the platform settings directory (not created here)."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home()))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "reconciler"


def default_settings_file() -> Path:
    return settings_dir() / "settings.json"


# ---------------------------------------------------------------------------
# Default values for every known key
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS: dict[str, Any] = {
    # Listing
    "sort_by": "title",
    "output_format": "text",

    # Diagnostics
    "log_level": "WARNING",
}

ENV_PREFIX = "RECONCILER_"

# Keys that can be overridden from the environment
_ENV_KEYS = ("sort_by", "output_format", "log_level")


def load_env_files() -> None:
    """
    Load .env files into the environment.

    Priority:
    1. Variables already set in the environment
    2. .env file in current directory
    3. .env file in user home directory
    """
    for env_path in (Path.cwd() / ".env", Path.home() / ".env"):
        if env_path.exists():
            load_dotenv(env_path, override=False)


def env_overrides() -> dict[str, Any]:
    """Collect RECONCILER_* overrides. Blank values are ignored."""
    overrides: dict[str, Any] = {}
    for key in _ENV_KEYS:
        raw = os.environ.get(ENV_PREFIX + key.upper())
        if raw is None or not raw.strip():
            continue
        overrides[key] = raw.strip()
    return overrides


# ---------------------------------------------------------------------------
# SettingsManager -- single authority for reading / writing settings
# ---------------------------------------------------------------------------

class SettingsManager:
    """Settings store backed by a JSON file.

    Usage:
        mgr = SettingsManager()
        sort_by = mgr.get("sort_by")
        mgr.set("sort_by", "rating")
        mgr.save()
    """

    def __init__(self, path: Path | None = None):
        self.path = path or default_settings_file()
        self._data = self._load()

    # -- public API -------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        fallback = DEFAULT_SETTINGS.get(key, default)
        return self._data.get(key, fallback)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def save(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
            return True
        except OSError:
            return False

    def all(self) -> dict[str, Any]:
        """Return a merged view: defaults + saved values."""
        merged = DEFAULT_SETTINGS.copy()
        merged.update(self._data)
        return merged

    def reload(self) -> None:
        self._data = self._load()

    # -- private ----------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError):
                return {}
            if isinstance(data, dict):
                return data
        return {}


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Load settings: defaults, then the settings file, then the environment."""
    load_env_files()
    merged = SettingsManager(path).all()
    merged.update(env_overrides())
    return merged
