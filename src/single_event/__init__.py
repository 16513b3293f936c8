"""Top-level package for single-event."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import load_config
    from .event import (
        FilterEvent,
        MapEvent,
        SingleEvent,
        SourceEvent,
        create_single_event,
    )
    from .exceptions import (
        ConfigValidationError,
        InvalidTakeCountError,
        SingleEventError,
    )
    from .logging_utils import configure_logging

__all__ = [
    "ConfigValidationError",
    "FilterEvent",
    "InvalidTakeCountError",
    "MapEvent",
    "SingleEvent",
    "SingleEventError",
    "SourceEvent",
    "configure_logging",
    "create_single_event",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols so config and logging dependencies load on demand."""
    if name in {
        "FilterEvent",
        "MapEvent",
        "SingleEvent",
        "SourceEvent",
        "create_single_event",
    }:
        from . import event

        return getattr(event, name)
    if name in {"ConfigValidationError", "InvalidTakeCountError", "SingleEventError"}:
        from .exceptions import (
            ConfigValidationError,
            InvalidTakeCountError,
            SingleEventError,
        )

        return {
            "ConfigValidationError": ConfigValidationError,
            "InvalidTakeCountError": InvalidTakeCountError,
            "SingleEventError": SingleEventError,
        }[name]
    if name == "load_config":
        from .config import load_config

        return load_config
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
