from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from snapsolve.constants import (
    DEFAULT_FALLBACK_MODEL,
    DEFAULT_PRIMARY_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    DEFAULT_THINKING_BUDGET,
    LANG_EN,
    SUPPORTED_LANGUAGES,
)
from snapsolve.errors import ConfigError


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    api_key: str
    api_base_url: Optional[str] = None
    access_code: Optional[str] = None
    primary_model: str = DEFAULT_PRIMARY_MODEL
    fallback_model: str = DEFAULT_FALLBACK_MODEL
    thinking_budget: Optional[int] = DEFAULT_THINKING_BUDGET
    temperature: float = DEFAULT_TEMPERATURE
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    default_language: str = LANG_EN
    log_level: str = "INFO"

    @property
    def uses_openai_compat(self) -> bool:
        return bool(self.api_base_url)

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = os.getenv("TELEGRAM_BOT_TOKEN")
        api_key = os.getenv("API_KEY")
        base_url = os.getenv("API_BASE_URL") or None
        access_code = os.getenv("ACCESS_CODE") or None
        primary_model = os.getenv("PRIMARY_MODEL") or DEFAULT_PRIMARY_MODEL
        fallback_model = os.getenv("FALLBACK_MODEL") or DEFAULT_FALLBACK_MODEL
        raw_budget = os.getenv("THINKING_BUDGET", str(DEFAULT_THINKING_BUDGET))
        temperature = os.getenv("TEMPERATURE", str(DEFAULT_TEMPERATURE))
        timeout = os.getenv("REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        language = os.getenv("DEFAULT_LANGUAGE", LANG_EN).strip().lower()
        log_level = os.getenv("LOG_LEVEL", "INFO")

        budget = int(raw_budget) if raw_budget.strip() else 0

        return cls._validate(
            telegram_bot_token=token,
            api_key=api_key,
            api_base_url=base_url.rstrip("/") if base_url else None,
            access_code=access_code,
            primary_model=primary_model,
            fallback_model=fallback_model,
            thinking_budget=budget if budget > 0 else None,
            temperature=float(temperature),
            request_timeout=int(timeout),
            default_language=language,
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        api_key: Optional[str],
        api_base_url: Optional[str],
        access_code: Optional[str],
        primary_model: str,
        fallback_model: str,
        thinking_budget: Optional[int],
        temperature: float,
        request_timeout: int,
        default_language: str,
        log_level: str,
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        match api_key:
            case None | "":
                raise ConfigError("API_KEY must be set in .env")
            case _:
                pass

        match default_language:
            case lang if lang in SUPPORTED_LANGUAGES:
                pass
            case other:
                raise ValueError(f"DEFAULT_LANGUAGE must be one of {SUPPORTED_LANGUAGES}, got {other!r}")

        return Config(
            telegram_bot_token=telegram_bot_token,
            api_key=api_key,
            api_base_url=api_base_url,
            access_code=access_code,
            primary_model=primary_model,
            fallback_model=fallback_model,
            thinking_budget=thinking_budget,
            temperature=temperature,
            request_timeout=request_timeout,
            default_language=default_language,
            log_level=log_level,
        )
