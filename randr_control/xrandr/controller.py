from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Callable

from ..models import Mode
from .xrandr import Xrandr, XrandrError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyRequest:
    output: str
    mode: Mode


@dataclass(frozen=True)
class ApplyResult:
    ok: bool
    error: str | None
    duration_ms: int | None


class ModeApplier:
    """Runs a single ``xrandr --output`` call off the caller's thread.

    ``on_complete`` is invoked exactly once from the worker thread with the
    outcome. It must be safe to call from another thread; the TUI wraps
    ``App.post_message``.
    """

    def __init__(self, on_complete: Callable[[ApplyResult], None], xrandr: Xrandr | None = None):
        self.on_complete = on_complete
        self.xrandr = xrandr or Xrandr()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def launched(self) -> bool:
        return self._thread is not None

    def launch(self, request: ApplyRequest) -> None:
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("apply already launched")
            self._thread = threading.Thread(target=self._worker, args=(request,), daemon=True)
        log.info(
            "applying %s %s @ %.1fHz", request.output, request.mode.size, request.mode.rate,
            extra={"event": "apply_launched"},
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _worker(self, request: ApplyRequest) -> None:
        try:
            duration_ms = self.xrandr.set_mode(request.output, request.mode)
            result = ApplyResult(True, None, duration_ms)
        except XrandrError as exc:
            result = ApplyResult(False, str(exc), None)
        except Exception as exc:
            log.exception("unexpected error while applying", extra={"event": "apply_crashed"})
            result = ApplyResult(False, str(exc) or type(exc).__name__, None)
        if result.ok:
            log.info("apply succeeded in %dms", result.duration_ms, extra={"event": "apply_ok"})
        else:
            log.warning("apply failed: %s", result.error, extra={"event": "apply_failed"})
        self.on_complete(result)
