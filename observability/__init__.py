"""Observability module for the weather search app.

Uses OpenTelemetry spans, exported to Arize Phoenix when tracing is enabled.
"""

from .instrumentation import init_tracing, trace_span, trace_tool

__all__ = ["init_tracing", "trace_tool", "trace_span"]
