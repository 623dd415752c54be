"""Progress reporting on a 0..100 scale with nestable sub-ranges.

A :class:`ProgressScope` owns the slice ``[base, base + span]`` of the global
scale. Callers report local fractions (0..1); the scope maps them into its
slice and never lets the reported value go backwards. Nested pipelines take
``child`` scopes of their parent's slice, so a document-level loop can hand
each unit a slice for its OCR batch without coordinate collisions.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressEvent:
    percent: float
    message: str


ProgressSink = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Fans progress events out to subscribed sinks."""

    def __init__(self, *sinks: ProgressSink) -> None:
        self._sinks: list[ProgressSink] = list(sinks)

    def subscribe(self, sink: ProgressSink) -> None:
        self._sinks.append(sink)

    def emit(self, percent: float, message: str) -> None:
        event = ProgressEvent(percent=round(max(0.0, min(100.0, percent)), 2), message=message)
        for sink in self._sinks:
            sink(event)

    def scope(self, base: float = 0.0, span: float = 100.0) -> "ProgressScope":
        return ProgressScope(self, base, span)


class ProgressScope:
    """A monotonic view onto ``[base, base + span]`` of a reporter."""

    def __init__(self, reporter: ProgressReporter, base: float, span: float) -> None:
        if span < 0:
            raise ValueError("span must not be negative")
        self._reporter = reporter
        self._base = base
        self._span = span
        self._fraction = 0.0

    @property
    def percent(self) -> float:
        return self._base + self._fraction * self._span

    def report(self, fraction: float, message: str) -> None:
        """Report local progress; values below the last one are raised to it."""
        self._fraction = max(self._fraction, max(0.0, min(1.0, fraction)))
        self._reporter.emit(self.percent, message)

    def child(self, offset: float, span: float) -> "ProgressScope":
        """Return a scope over a local sub-range, both given as fractions of this one."""
        return ProgressScope(
            self._reporter,
            self._base + offset * self._span,
            span * self._span,
        )


def null_scope() -> ProgressScope:
    """Scope whose events go nowhere."""
    return ProgressReporter().scope()
