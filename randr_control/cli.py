"""CLI entrypoints for the display mode picker."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .logging_setup import configure_logging, get_logger
from .models import Display
from .xrandr.parser import parse_query
from .xrandr.xrandr import AcquisitionError, Xrandr


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def load_displays(report: str | None) -> list[Display]:
    """Parse a saved report, or ``xrandr --query`` when none is given."""
    if report is None:
        displays, _ = Xrandr().query()
        return displays
    try:
        if report == "-":
            text = sys.stdin.read()
        else:
            text = Path(report).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise AcquisitionError(f"cannot read report {report}: {exc}") from exc
    return parse_query(text)


def cmd_run(args: argparse.Namespace) -> int:
    from .tui import RandrApp

    try:
        app = RandrApp(displays=load_displays(args.report))
    except AcquisitionError as exc:
        get_logger().error("report acquisition failed: %s", exc, extra={"event": "acquisition_failed"})
        app = RandrApp(error=str(exc))
    app.run()
    return app.return_code or 0


def cmd_list(args: argparse.Namespace) -> int:
    try:
        displays = load_displays(args.report)
    except AcquisitionError as exc:
        get_logger().error("report acquisition failed: %s", exc, extra={"event": "acquisition_failed"})
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    _print_json([d.to_dict() for d in displays])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="randr-control", description="Pick a display mode and apply it with xrandr")
    parser.add_argument("--report", default=None, help="Read an xrandr --query report from FILE ('-' for stdin)")
    parser.set_defaults(func=cmd_run)
    sub = parser.add_subparsers(dest="command")

    run_cmd = sub.add_parser("run", help="Pick display, resolution and refresh rate interactively")
    run_cmd.set_defaults(func=cmd_run)

    list_cmd = sub.add_parser("list", help="Print detected displays and modes as JSON")
    list_cmd.set_defaults(func=cmd_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
