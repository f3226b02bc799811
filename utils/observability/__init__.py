"""Observability utilities for the agent.

- @observe decorator for automatic span creation
- Token usage tracking and aggregation

Spans are only emitted when the ``opentelemetry`` package is installed and a
tracer provider is configured by the host application.
"""

from .observe import observe

__all__ = ["observe"]
