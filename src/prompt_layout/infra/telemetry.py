"""OpenTelemetry helpers.

Only the OpenTelemetry *API* is used here: spans are no-ops until the
hosting application installs a ``TracerProvider``.

Usage::

    from prompt_layout.infra.telemetry import SPAN_PROMPT_RENDER, tracer

    with tracer.start_as_current_span(SPAN_PROMPT_RENDER) as span:
        ...
"""

from __future__ import annotations

from opentelemetry import trace

tracer = trace.get_tracer("prompt_layout")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_PROMPT_RENDER = "prompt.render"
SPAN_MODERATION_ANALYZE = "moderation.analyze"

# Span attribute keys
ATTR_MAX_TOKENS = "prompt.max_tokens"
ATTR_LENGTH = "prompt.length"
ATTR_TOO_LONG = "prompt.too_long"
ATTR_MODE = "prompt.mode"
ATTR_FLAGGED = "moderation.flagged"
