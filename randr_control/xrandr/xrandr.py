import logging
import os
import subprocess
import time
from .parser import parse_query
from ..config import CONFIG
from ..models import Display, Mode

log = logging.getLogger(__name__)


class XrandrError(RuntimeError):
    pass


class AcquisitionError(XrandrError):
    pass


class ApplyError(XrandrError):
    pass


def mode_args(output: str, mode: Mode) -> list[str]:
    return ["--output", output, "--mode", mode.size, "--rate", f"{mode.rate:.1f}"]


class Xrandr:
    def __init__(self, path: str | None = None):
        self.path = path or CONFIG.xrandr_path

    def _env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.setdefault("DISPLAY", CONFIG.x_display)
        return env

    def _run(self, args: list[str], timeout_ms: int | None = None, errors: str = "strict") -> tuple[str, int]:
        timeout = timeout_ms / 1000.0 if timeout_ms else None
        cmd = [self.path] + args
        log.debug("running %s", " ".join(cmd))
        try:
            start = time.perf_counter()
            result = subprocess.run(
                cmd, capture_output=True, text=True, encoding="utf-8", errors=errors, timeout=timeout, env=self._env()
            )
            duration_ms = int((time.perf_counter() - start) * 1000)
        except subprocess.TimeoutExpired as exc:
            raise XrandrError(f"xrandr timeout after {timeout_ms}ms") from exc
        except UnicodeDecodeError as exc:
            raise XrandrError(f"xrandr output is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise XrandrError(f"failed to run {self.path}: {exc}") from exc
        if result.returncode != 0:
            raise XrandrError(result.stderr.strip() or result.stdout.strip() or f"xrandr exited with status {result.returncode}")
        return result.stdout, duration_ms

    def query(self) -> tuple[list[Display], int]:
        try:
            out, ms = self._run(["--query"], timeout_ms=CONFIG.query_timeout_ms)
        except XrandrError as exc:
            raise AcquisitionError(str(exc)) from exc
        displays = parse_query(out)
        log.info("query returned %d displays in %dms", len(displays), ms, extra={"event": "query"})
        return displays, ms

    def set_mode(self, output: str, mode: Mode) -> int:
        try:
            _, ms = self._run(mode_args(output, mode), errors="replace")
        except XrandrError as exc:
            raise ApplyError(str(exc)) from exc
        return ms
