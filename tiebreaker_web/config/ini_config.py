########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tiebreaker_web.domain.models import AnalysisMode

INI_DEFAULT_NAME = "Tiebreaker.ini"
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class AppSettings:
    gemini_api_key: str
    gemini_model: str
    gemini_temperature: Optional[float]
    gemini_timeout_seconds: Optional[int]

    default_mode: AnalysisMode
    missing_cell_placeholder: str

    log_level: str

    flask_host: str
    flask_port: int
    flask_debug: bool


class IniConfig:
    """
    Adapter around ConfigParser and environment lookup.
    Keeps INI handling out of your app/service code.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    def _cfg_str(self, section: str, key: str, default: str = "") -> str:
        return (self._cfg.get(section, key, fallback=default) or "").strip() or default

    def _cfg_optional_float(self, section: str, key: str) -> Optional[float]:
        raw = self._cfg_str(section, key)
        return float(raw) if raw else None

    def _cfg_optional_int(self, section: str, key: str) -> Optional[int]:
        raw = self._cfg_str(section, key)
        return int(raw) if raw else None

    def load_settings(self) -> AppSettings:
        # Gemini: key comes from the environment first, INI only as a fallback
        api_key_env = self._cfg_str("gemini", "api_key_env", "GEMINI_API_KEY")
        gemini_api_key = (os.getenv(api_key_env) or "").strip() or self._cfg_str("gemini", "api_key")
        gemini_model = self._cfg_str("gemini", "model", DEFAULT_MODEL)
        gemini_temperature = self._cfg_optional_float("gemini", "temperature")
        gemini_timeout_seconds = self._cfg_optional_int("gemini", "timeout_seconds")

        # Display
        default_mode = AnalysisMode.parse(self._cfg_str("display", "default_mode", AnalysisMode.PROS_CONS.value))
        # no strip here: the placeholder is shown verbatim
        missing_cell_placeholder = self._cfg.get("display", "missing_cell_placeholder", fallback="—") or "—"

        # Logging
        log_level = self._cfg_str("logging", "level", "INFO").upper()

        # Flask
        flask_host = self._cfg_str("flask", "host", "127.0.0.1")
        flask_port = self._cfg.getint("flask", "port", fallback=5000)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)

        return AppSettings(
            gemini_api_key=gemini_api_key,
            gemini_model=gemini_model,
            gemini_temperature=gemini_temperature,
            gemini_timeout_seconds=gemini_timeout_seconds,
            default_mode=default_mode,
            missing_cell_placeholder=missing_cell_placeholder,
            log_level=log_level,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
        )
