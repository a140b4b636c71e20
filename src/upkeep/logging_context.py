from __future__ import annotations

import contextvars
import logging

_meta: contextvars.ContextVar[dict[str, str]] = contextvars.ContextVar("upkeep_log_meta", default={})

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s%(meta)s"


def add_meta(**fields: str) -> None:
    """Attach ``fields`` to every log record emitted from the current task."""
    _meta.set({**_meta.get(), **fields})


def remove_meta(*keys: str) -> None:
    _meta.set({k: v for k, v in _meta.get().items() if k not in keys})


def get_meta() -> dict[str, str]:
    return dict(_meta.get())


class MetaFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        meta = _meta.get()
        record.meta = "".join(f" {k}={v}" for k, v in meta.items()) if meta else ""
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, MetaFilter) for f in handler.filters):
            handler.addFilter(MetaFilter())
