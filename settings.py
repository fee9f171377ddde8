"""
Environment-driven configuration.

Values come from the process environment, with a local .env file loaded first
if present. Blank values fall back to the defaults below.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

BASE_DIR = Path(__file__).resolve().parent

DEFAULT_MODEL = "mistralai/mistral-7b-instruct"
DEFAULT_REFERER = "https://mediguidnyc.netlify.app"
DEFAULT_TITLE = "MediGuid NYC AI Assistant"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

_TRUTHY = {"1", "true", "yes", "y", "on"}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    openrouter_api_key: str = ""
    openrouter_model: str = DEFAULT_MODEL
    openrouter_http_referer: str = DEFAULT_REFERER
    openrouter_x_title: str = DEFAULT_TITLE
    openrouter_base_url: str = DEFAULT_BASE_URL
    llm_timeout_secs: float = 60.0
    llm_mock: bool = False
    data_dir: Path = BASE_DIR / "data"
    port: int = 5000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(*names):
            for name in names:
                value = (environ.get(name) or "").strip()
                if value:
                    return value
            return None

        values = {
            # support both OPENROUTER_API_KEY and OPENROUTER_KEY
            "openrouter_api_key": get("OPENROUTER_API_KEY", "OPENROUTER_KEY"),
            "openrouter_model": get("OPENROUTER_MODEL"),
            "openrouter_http_referer": get("OPENROUTER_HTTP_REFERER"),
            "openrouter_x_title": get("OPENROUTER_X_TITLE"),
            "openrouter_base_url": get("OPENROUTER_BASE_URL"),
            "llm_timeout_secs": get("LLM_TIMEOUT_SECS"),
            "data_dir": get("DATA_DIR"),
            "port": get("PORT"),
            "log_level": get("LOG_LEVEL"),
        }
        mock = get("LLM_MOCK")
        if mock is not None:
            values["llm_mock"] = mock.lower() in _TRUTHY
        return cls(**{k: v for k, v in values.items() if v is not None})
