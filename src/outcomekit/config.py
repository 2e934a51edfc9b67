"""Settings for how guards report the faults they capture.

Resolution follows a fixed precedence: defaults < environment < overrides.
Environment variables use the ``OUTCOMEKIT_`` prefix and are read after an
optional ``.env`` file has been loaded. A ``settings_scope`` installs a
resolved ``Settings`` for the current context (thread or asyncio task), so
nested code sees it without any argument threading.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from outcomekit.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

ENV_PREFIX = "OUTCOMEKIT_"

_DOTENV_LOADED = False

_scoped_settings: contextvars.ContextVar[Settings | None] = contextvars.ContextVar(
    "outcomekit_settings", default=None
)


class Settings(BaseModel):
    """Validated, immutable settings schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    log_captured_faults: bool = Field(default=True)
    fault_log_level: int = Field(default=logging.DEBUG, ge=0)
    log_tracebacks: bool = Field(default=False)

    @field_validator("fault_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names ("warning", "DEBUG") as well as integers."""
        if isinstance(v, str):
            s = v.strip()
            if s.isdigit():
                return int(s)
            level = logging.getLevelName(s.upper())
            if isinstance(level, int):
                return level
            raise ValueError(f"unknown log level {v!r}")
        return v


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv()
    _DOTENV_LOADED = True


def load_env() -> dict[str, str]:
    """Return schema fields found in the environment, keyed by field name."""
    found: dict[str, str] = {}
    for name in Settings.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            found[name] = raw
    return found


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> Settings:
    """Resolve settings from defaults, the environment, and ``overrides``.

    Raises:
        ConfigurationError: If a value fails validation or a key is unknown.
    """
    _load_dotenv_once()
    merged: dict[str, Any] = {**load_env(), **(overrides or {})}
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err.get("loc", ())) or "settings"
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[13:]
        raise ConfigurationError(
            f"Invalid setting {field}: {msg}",
            hint=f"Check {ENV_PREFIX}{field.upper()} or the override passed for it",
        ) from e


def current_settings() -> Settings:
    """Return the settings installed by the innermost scope, or resolve fresh ones."""
    scoped = _scoped_settings.get()
    if scoped is not None:
        return scoped
    return resolve_settings()


@contextmanager
def settings_scope(**overrides: Any) -> Generator[Settings]:
    """Install resolved settings for the duration of the block.

    Example:
        with settings_scope(fault_log_level="WARNING"):
            guard_sync(risky)
    """
    settings = resolve_settings(overrides)
    token = _scoped_settings.set(settings)
    try:
        yield settings
    finally:
        _scoped_settings.reset(token)
