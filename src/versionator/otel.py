"""
OTel span event emission helpers for exclusion diagnostics.

Events are added to the current span only when it is recording, so the
helpers are safe to call with no tracer provider configured.

Usage::

    from versionator.otel import emit_field_excluded

    emit_field_excluded("2.0", "1.0", "9999", "address.zip")
"""

from __future__ import annotations

import logging

from opentelemetry import trace as otel_trace

logger = logging.getLogger(__name__)

EVENT_FIELD_EXCLUDED = "versionator.field.excluded"
EVENT_EXCLUSIONS_COMPUTED = "versionator.exclusions.computed"


def add_span_event(
    name: str, attributes: dict[str, str | int | float | bool]
) -> None:
    """Add an event to the current OTel span.

    No-op when the current span is not recording.

    Args:
        name: Event name (e.g. ``"versionator.field.excluded"``).
        attributes: Flat dict of span event attributes.
    """
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_field_excluded(since: str, requested: str, until: str, path: str) -> None:
    """Emit a span event for a field excluded at the requested version.

    Event name: ``versionator.field.excluded``
    """
    attrs: dict[str, str | int | float | bool] = {
        "versionator.since": since,
        "versionator.requested": requested,
        "versionator.until": until,
        "versionator.path": path,
    }
    add_span_event(EVENT_FIELD_EXCLUDED, attrs)


def emit_exclusions_computed(root_type: str, requested: str, excluded_count: int) -> None:
    """Emit a span event summarising one exclusion computation.

    Event name: ``versionator.exclusions.computed``
    """
    attrs: dict[str, str | int | float | bool] = {
        "versionator.root_type": root_type,
        "versionator.requested": requested,
        "versionator.excluded_count": excluded_count,
    }
    logger.debug(
        "Exclusions computed: root=%s version=%s excluded=%d",
        root_type,
        requested,
        excluded_count,
    )
    add_span_event(EVENT_EXCLUSIONS_COMPUTED, attrs)
