"""Structured logging for conversion runs.

A conversion runs inside :func:`conversion_scope`. Code deep in the call
stack (extensions, fragment merging) reports through :func:`increment_counter`
and :func:`record_problem` without being handed the scope explicitly; both are
no-ops outside a scope.
"""
from __future__ import annotations

import contextvars
import logging
import uuid
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, Iterator, List, Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_ACTIVE: contextvars.ContextVar[Optional["ConversionContext"]] = contextvars.ContextVar(
    "markupgen_conversion", default=None
)


def configure_root(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


@contextmanager
def scoped_timer(
    logger: logging.Logger, event: str, *, extra: Optional[Mapping[str, object]] = None
) -> Iterator[None]:
    """Log *event* at DEBUG with its wall-clock duration once the block exits."""

    started = perf_counter()
    try:
        yield
    finally:
        elapsed = perf_counter() - started
        logger.debug("%s took %.3fs", event, elapsed, extra={"duration_s": elapsed, **(extra or {})})


@dataclass(slots=True)
class ConversionContext:
    """Counters, problems and log fields shared by one conversion run."""

    name: str
    logger: logging.Logger
    conversion_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    metadata: Dict[str, object] = field(default_factory=dict)
    counters: Counter = field(default_factory=Counter)
    problems: List[Dict[str, object]] = field(default_factory=list)
    started: float = field(default_factory=perf_counter)

    def fields(self, **values: object) -> Dict[str, object]:
        """Return the ``extra`` mapping attached to every record of this run."""

        return {"conversion_id": self.conversion_id, "conversion": self.name, **self.metadata, **values}

    def emit(self, level: int, event: str, **values: object) -> None:
        self.logger.log(level, event, extra=self.fields(**values))

    def count(self, counter: str, amount: int = 1) -> int:
        self.counters[counter] += amount
        return self.counters[counter]

    def summary(self) -> Dict[str, object]:
        return {
            "duration_s": perf_counter() - self.started,
            "counters": dict(self.counters),
            "problems": len(self.problems),
        }


@contextmanager
def conversion_scope(
    name: str,
    *,
    logger: Optional[logging.Logger] = None,
    extra: Optional[Mapping[str, object]] = None,
) -> Iterator[ConversionContext]:
    """Run a block as one named conversion step.

    Logs ``conversion.start`` and ``conversion.finish`` (with counters and the
    number of problems). Exceptions are logged as ``conversion.error`` and
    re-raised unchanged.
    """

    context = ConversionContext(
        name=name,
        logger=logger or logging.getLogger("markupgen.conversion"),
        metadata=dict(extra or {}),
    )
    token = _ACTIVE.set(context)
    context.emit(logging.INFO, "conversion.start")
    try:
        with scoped_timer(context.logger, name, extra=context.fields()):
            yield context
    except Exception:
        context.logger.exception("conversion.error", extra=context.fields())
        raise
    finally:
        context.emit(logging.INFO, "conversion.finish", **context.summary())
        _ACTIVE.reset(token)


def current_conversion() -> Optional[ConversionContext]:
    return _ACTIVE.get()


def increment_counter(name: str, amount: int = 1) -> None:
    context = current_conversion()
    if context is not None:
        context.count(name, amount)


def record_problem(problem: Mapping[str, object]) -> None:
    """Attach a non-fatal problem record to the active conversion."""

    context = current_conversion()
    if context is not None:
        context.problems.append(dict(problem))


__all__ = [
    "ConversionContext",
    "LOG_FORMAT",
    "configure_root",
    "conversion_scope",
    "current_conversion",
    "increment_counter",
    "record_problem",
    "scoped_timer",
]
