"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files
from ledger.parser import SUPPORTED_EXTENSIONS


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(*names: str) -> str | None:
    """
    Return the first non-empty value among *names*.
    """

    _load_env_once()
    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip():
            return value.strip()
    return None


@dataclass(frozen=True)
class UploadSettings:
    """
    Runtime settings for spreadsheet uploads.
    """

    max_upload_bytes: int = 50 * 1024 * 1024
    allowed_extensions: frozenset[str] = SUPPORTED_EXTENSIONS


@dataclass(frozen=True)
class AssistantSettings:
    """
    Language-model settings for the dataset assistant.
    """

    adapter: str = "openai"
    model: str = "gpt-4o-mini"
    max_tokens: int = 2048
    api_key: str | None = None
    base_url: str | None = None


@dataclass(frozen=True)
class FrontendSettings:
    """
    Streamlit dashboard settings.
    """

    show_raw_payloads: bool = False


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        max_upload_bytes=max(1, _get_int_env("UPLOAD_MAX_BYTES", 50 * 1024 * 1024)),
    )


@lru_cache(maxsize=1)
def get_assistant_settings() -> AssistantSettings:
    """
    Return cached assistant settings from environment variables.

    LLM_ADAPTER=mock selects the deterministic adapter used in tests.
    """

    return AssistantSettings(
        adapter=_get_str_env("LLM_ADAPTER", "openai").lower(),
        model=_get_str_env("LLM_MODEL", "gpt-4o-mini"),
        max_tokens=max(1, _get_int_env("LLM_MAX_TOKENS", 2048)),
        api_key=_get_optional_str_env("LLM_API_KEY", "OPENAI_API_KEY"),
        base_url=_get_optional_str_env("LLM_BASE_URL"),
    )


@lru_cache(maxsize=1)
def get_frontend_settings() -> FrontendSettings:
    return FrontendSettings(
        show_raw_payloads=_get_bool_env("DASHBOARD_SHOW_RAW_PAYLOADS", False),
    )
