from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    supabase_url: str
    anon_key: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True
    face_match_threshold: float = 0.6

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _read_profiled(name: str, env_key: str) -> str:
    return (
        (os.getenv(f"{name}_{env_key}") or "").strip()
        or (os.getenv(name) or "").strip()
    )


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("CLOCKWISE_ENV") or "dev").strip()
    env_key = env_name.upper()

    supabase_url = _read_profiled("CLOCKWISE_SUPABASE_URL", env_key)
    anon_key = _read_profiled("CLOCKWISE_SUPABASE_ANON_KEY", env_key)

    timeout_seconds = _read_float("CLOCKWISE_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid CLOCKWISE_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "CLOCKWISE_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid CLOCKWISE_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    read_timeout_seconds = _read_float(
        "CLOCKWISE_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid CLOCKWISE_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    retries = _read_int("CLOCKWISE_RETRIES", "3")
    _validate(retries >= 0, f"Invalid CLOCKWISE_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("CLOCKWISE_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        (
            "Invalid CLOCKWISE_RETRY_BACKOFF_SECONDS: "
            f"expected >= 0, got {retry_backoff_seconds}"
        ),
    )

    max_connections = _read_int("CLOCKWISE_MAX_CONNECTIONS", "20")
    _validate(
        max_connections >= 1,
        f"Invalid CLOCKWISE_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    face_match_threshold = _read_float("CLOCKWISE_FACE_MATCH_THRESHOLD", "0.6")
    _validate(
        0 < face_match_threshold <= 1,
        (
            "Invalid CLOCKWISE_FACE_MATCH_THRESHOLD: "
            f"expected a value in (0, 1], got {face_match_threshold}"
        ),
    )

    verify_ssl = _coerce_bool(os.getenv("CLOCKWISE_VERIFY_SSL"), True)

    values = {
        "CLOCKWISE_SUPABASE_URL": supabase_url,
        "CLOCKWISE_SUPABASE_ANON_KEY": anon_key,
    }
    _require(values, ["CLOCKWISE_SUPABASE_URL", "CLOCKWISE_SUPABASE_ANON_KEY"])

    return ClientConfig(
        env_name=env_name,
        supabase_url=supabase_url.rstrip("/"),
        anon_key=anon_key,
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        face_match_threshold=face_match_threshold,
    )
