import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

# .env не перекрывает уже заданные переменные окружения
load_dotenv(".env", override=False)

DEFAULT_API_BASE_URL = "https://fakestoreapi.com"


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: float = 30.0
    log_level: str = "INFO"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None


def load_settings() -> Settings:
    """Читает настройки из переменных окружения"""
    return Settings(
        api_base_url=os.environ.get("SHOP_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        api_timeout=_float_env("SHOP_API_TIMEOUT", 30.0),
        log_level=os.environ.get("SHOP_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
