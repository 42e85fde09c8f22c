import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    xrandr_path: str = os.getenv("XRANDR_PATH", "xrandr")
    query_timeout_ms: int = int(os.getenv("XRANDR_QUERY_TIMEOUT_MS", "5000"))
    x_display: str = os.getenv("DISPLAY", ":0")

    log_dir: str = os.getenv("LOG_DIR", os.path.join(os.path.expanduser("~"), ".cache", "randr-control"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


CONFIG = AppConfig()
