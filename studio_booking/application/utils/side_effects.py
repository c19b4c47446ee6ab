from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class SideEffectResult:
    ok: bool
    value: Any = None
    error: str | None = None


def attempt(label: str, fn: Callable[[], Any], logger: logging.Logger, **context: Any) -> SideEffectResult:
    """
    Run a best-effort step. Failures are logged and returned, never raised.
    Callers read the result for logging only.
    """
    try:
        return SideEffectResult(ok=True, value=fn())
    except Exception as e:
        logger.warning(
            f"{label} failed",
            extra={**context, "reason": label, "error": f"{type(e).__name__}: {e}"},
        )
        return SideEffectResult(ok=False, error=str(e) or type(e).__name__)
