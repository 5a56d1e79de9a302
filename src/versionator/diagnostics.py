"""
Diagnostics sinks notified whenever a field is excluded.

A sink is fire-and-forget: ``ExclusionCalculator`` calls ``record()``
after adding a path to the exclusion set and ignores any error it raises.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from versionator.config import VersionatorConfig
from versionator.logger import ExclusionLogger
from versionator.otel import emit_field_excluded


@runtime_checkable
class DiagnosticsSink(Protocol):
    def record(self, since: str, requested: str, until: str, path: str) -> None:
        ...


class SpanEventSink:
    """Adds a ``versionator.field.excluded`` event to the current span."""

    def record(self, since: str, requested: str, until: str, path: str) -> None:
        emit_field_excluded(since, requested, until, path)


class LoggingSink:
    """Writes one structured JSON log line per excluded field."""

    def __init__(self, exclusion_logger: Optional[ExclusionLogger] = None) -> None:
        self._log = exclusion_logger or ExclusionLogger()

    def record(self, since: str, requested: str, until: str, path: str) -> None:
        self._log.log_field_excluded(
            since=since, requested=requested, until=until, path=path
        )


class CompositeSink:
    """Fans a record out to several sinks, in order."""

    def __init__(self, *sinks: DiagnosticsSink) -> None:
        self.sinks = list(sinks)

    def record(self, since: str, requested: str, until: str, path: str) -> None:
        for sink in self.sinks:
            sink.record(since, requested, until, path)


def sink_from_config(config: VersionatorConfig) -> Optional[DiagnosticsSink]:
    """Build the sink selected by ``emit_span_events`` / ``log_exclusions``."""
    sinks: list[DiagnosticsSink] = []
    if config.emit_span_events:
        sinks.append(SpanEventSink())
    if config.log_exclusions:
        sinks.append(LoggingSink(ExclusionLogger(service_name=config.service_name)))
    if not sinks:
        return None
    if len(sinks) == 1:
        return sinks[0]
    return CompositeSink(*sinks)
