"""outcomekit: success/failure outcomes without exception control flow.

Public API:
    - success(), failure(): Build an Outcome directly
    - guard_sync(), guard_async(): Run fallible code into an Outcome
    - guard_iter(), guard_stream(): Lazily guard a sequence of results
    - Outcome, Success, Failure: The container and its two variants
    - settings_scope(): Scope how captured faults are logged
"""

from __future__ import annotations

import logging

from outcomekit.config import Settings, current_settings, resolve_settings, settings_scope
from outcomekit.errors import (
    ConfigurationError,
    FaultCoercionError,
    InvalidErrorPayloadError,
    OutcomeError,
)
from outcomekit.guards import (
    FaultMapper,
    guard_async,
    guard_iter,
    guard_stream,
    guard_sync,
)
from outcomekit.outcome import Failure, Outcome, Success, failure, success

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("outcomekit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("outcomekit").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "Failure",
    "FaultCoercionError",
    "FaultMapper",
    "InvalidErrorPayloadError",
    "Outcome",
    "OutcomeError",
    "Settings",
    "Success",
    "current_settings",
    "failure",
    "guard_async",
    "guard_iter",
    "guard_stream",
    "guard_sync",
    "resolve_settings",
    "settings_scope",
    "success",
]
