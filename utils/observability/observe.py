"""Simple, minimal tracing decorator for agent steps and model calls."""

from __future__ import annotations

from functools import wraps
from inspect import signature
from typing import Any, Callable, Optional
from contextvars import ContextVar
from dataclasses import is_dataclass, asdict
import json
import time

TRACER_NAME = "plugin-agent"

SECRET_REDACT_KEYS = {
    "apikey", "accesstoken", "refreshtoken", "clientsecret", "secret",
    "password", "authorization", "bearer", "cookie", "setcookie", "privatekey",
}


def observe(_fn: Optional[Callable[..., Any]] = None, *, llm: bool = False, root: bool = False) -> Callable[..., Any]:
    """Minimal tracing decorator.

    Usage:
        @observe(llm=True)
        def completion(self, messages): ...

        @observe(root=True)
        def step(self, ...): ...

    - Auto-names spans from function module.qualname
    - Records timing, exceptions, basic I/O
    - Tracks token usage when llm=True
    - Aggregates total tokens when root=True
    - No-op if OpenTelemetry is not installed
    """

    def _decorate(fn: Callable[..., Any]) -> Callable[..., Any]:
        module = getattr(fn, "__module__", "") or ""
        qualname = getattr(fn, "__qualname__", fn.__name__)
        span_name = f"{module}.{qualname}" if module else qualname

        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                from opentelemetry import trace
            except ImportError:
                return fn(*args, **kwargs)
            tracer = trace.get_tracer(TRACER_NAME)

            start_time = time.perf_counter()

            with tracer.start_as_current_span(span_name) as span:
                try:
                    if root:
                        _start_token_accumulator(span)

                    _capture_input(span, fn, args, kwargs, llm)
                    result = fn(*args, **kwargs)

                    if llm:
                        _capture_llm_output(span, result)
                    else:
                        span.set_attribute("output", str(result)[:8192])

                    return result

                except Exception as e:
                    span.record_exception(e)
                    span.set_status(trace.Status(trace.StatusCode.ERROR))
                    raise

                finally:
                    duration_ms = int((time.perf_counter() - start_time) * 1000)
                    span.set_attribute("duration_ms", duration_ms)
                    if root:
                        _finalize_token_accumulator(span)

        return wrapper

    # Support both @observe and @observe() forms
    if callable(_fn):
        return _decorate(_fn)
    return _decorate


def _is_secret(key: Any) -> bool:
    return str(key).lower().replace("_", "").replace("-", "") in SECRET_REDACT_KEYS


def _safe_preview(val: Any, max_len: int = 512) -> Any:
    """Create a JSON-friendly, truncated, secret-redacted preview of any value."""
    if val is None or isinstance(val, (bool, int, float)):
        return val
    if isinstance(val, str):
        return val if len(val) <= max_len else val[:max_len] + "..."
    if isinstance(val, dict):
        return {
            str(k): "<redacted>" if _is_secret(k) else _safe_preview(v, max_len)
            for k, v in list(val.items())[:20]
        }
    if isinstance(val, (list, tuple)):
        return [_safe_preview(v, max_len) for v in list(val)[:20]]
    if is_dataclass(val) and not isinstance(val, type):
        return _safe_preview(asdict(val), max_len)
    return _safe_preview(repr(val), max_len)


def _capture_input(span: Any, fn: Callable, args: tuple, kwargs: dict, llm: bool) -> None:
    """Capture function inputs with previews and redaction; never breaks the call."""
    try:
        bound = signature(fn).bind_partial(*args, **kwargs)

        # LLM path: capture messages only (longer cap for prompt visibility)
        if llm:
            messages = bound.arguments.get("messages")
            if messages:
                msg_str = json.dumps(messages, ensure_ascii=False, separators=(",", ":"))
                span.set_attribute("input", msg_str[:12288])
            return

        inputs = {
            name: "<redacted>" if _is_secret(name) else _safe_preview(value)
            for name, value in bound.arguments.items()
            if name not in {"self", "cls"}
        }
        input_str = json.dumps(inputs, ensure_ascii=False, separators=(",", ":"), default=str)
        span.set_attribute("input", input_str[:6144] + ("..." if len(input_str) > 6144 else ""))
    except Exception:
        pass


def _capture_llm_output(span: Any, result: Any) -> None:
    """Capture LLM outputs and track tokens."""
    try:
        text = getattr(result, "text", None)
        if text is None:
            span.set_attribute("output", str(result)[:8192])
            return
        span.set_attribute("output", text)
        for attr, key in (
            ("prompt_tokens", "tokens.prompt"),
            ("completion_tokens", "tokens.completion"),
            ("total_tokens", "tokens.total"),
        ):
            value = getattr(result, attr, None)
            if isinstance(value, int):
                span.set_attribute(key, value)
        total = getattr(result, "total_tokens", None)
        if isinstance(total, int):
            _accumulate_tokens(total)
    except Exception:
        pass


# ── Token Accumulation ──────────────────────────────────────────────────────
# Root spans start a token counter; child LLM calls increment it; root finalizes total.

_tokens: ContextVar[Optional[int]] = ContextVar("tokens", default=None)
_owner: ContextVar[Optional[int]] = ContextVar("owner", default=None)


def _start_token_accumulator(span: Any) -> None:
    if _tokens.get() is None:
        _tokens.set(0)
        _owner.set(id(span))


def _accumulate_tokens(token_count: int) -> None:
    current = _tokens.get()
    if isinstance(current, int):
        _tokens.set(current + token_count)


def _finalize_token_accumulator(span: Any) -> None:
    if _owner.get() == id(span):
        total = _tokens.get()
        if isinstance(total, int) and total > 0:
            span.set_attribute("tokens.total", total)
        _tokens.set(None)
        _owner.set(None)
