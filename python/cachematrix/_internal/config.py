from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ENV_CONDITION_WARN_THRESHOLD = "CACHEMATRIX_CONDITION_WARN_THRESHOLD"
ENV_CONDITION_LIMIT = "CACHEMATRIX_CONDITION_LIMIT"
ENV_TRACE = "CACHEMATRIX_TRACE"

DEFAULT_CONDITION_WARN_THRESHOLD = 1e12

_NONE_TOKENS = frozenset({"", "none", "off"})
_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _parse_threshold(name: str, raw: str) -> float | None:
    text = raw.strip().lower()
    if text in _NONE_TOKENS:
        return None
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"{name} must be a positive number or 'none', got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{name} must be a positive number or 'none', got {raw!r}")
    return value


def _parse_flag(name: str, raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE_TOKENS:
        return True
    if text in _FALSE_TOKENS:
        return False
    raise ValueError(f"{name} must be a boolean flag (1/0, true/false), got {raw!r}")


def check_threshold(name: str, value: float | None) -> float | None:
    if value is None:
        return None
    value = float(value)
    if not value > 0:
        raise ValueError(f"{name} must be positive or None, got {value!r}")
    return value


@dataclass
class ResolverConfig:
    """Knobs for InverseResolver.

    condition_warn_threshold: warn when the 1-norm condition estimate of a
        freshly inverted matrix exceeds this value (None disables).
    condition_limit: treat matrices above this condition estimate as singular
        (None disables).
    trace_enabled: record hit/miss events on the trace sink.
    """

    condition_warn_threshold: float | None = DEFAULT_CONDITION_WARN_THRESHOLD
    condition_limit: float | None = None
    trace_enabled: bool = True

    def __post_init__(self) -> None:
        self.condition_warn_threshold = check_threshold(
            "condition_warn_threshold", self.condition_warn_threshold
        )
        self.condition_limit = check_threshold("condition_limit", self.condition_limit)
        self.trace_enabled = bool(self.trace_enabled)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ResolverConfig":
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        raw = env.get(ENV_CONDITION_WARN_THRESHOLD)
        if raw is not None:
            kwargs["condition_warn_threshold"] = _parse_threshold(ENV_CONDITION_WARN_THRESHOLD, raw)

        raw = env.get(ENV_CONDITION_LIMIT)
        if raw is not None:
            kwargs["condition_limit"] = _parse_threshold(ENV_CONDITION_LIMIT, raw)

        raw = env.get(ENV_TRACE)
        if raw is not None:
            kwargs["trace_enabled"] = _parse_flag(ENV_TRACE, raw)

        return cls(**kwargs)  # type: ignore[arg-type]
