import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from randr_control.cli import build_parser, load_displays
from randr_control.xrandr.xrandr import AcquisitionError

REPORT = """Screen 0: minimum 320 x 200, current 1920 x 1080, maximum 16384 x 16384
DP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+  59.94
HDMI-1 disconnected (normal left inverted right x axis y axis)
"""


class TestCli(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".txt")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(REPORT)

    def tearDown(self):
        os.unlink(self.path)

    def test_list_from_report(self):
        args = build_parser().parse_args(["--report", self.path, "list"])
        out = io.StringIO()
        with redirect_stdout(out):
            code = args.func(args)
        self.assertEqual(code, 0)
        data = json.loads(out.getvalue())
        self.assertEqual([d["name"] for d in data], ["DP-1", "HDMI-1"])
        self.assertEqual(data[0]["current"]["rate"], 60.0)
        self.assertEqual(len(data[0]["modes"]), 2)

    def test_list_missing_report(self):
        args = build_parser().parse_args(["--report", self.path + ".missing", "list"])
        err = io.StringIO()
        with redirect_stderr(err), redirect_stdout(io.StringIO()):
            code = args.func(args)
        self.assertEqual(code, 1)
        self.assertIn("Error: cannot read report", err.getvalue())

    def test_default_command_is_run(self):
        args = build_parser().parse_args([])
        self.assertEqual(args.func.__name__, "cmd_run")

    def test_load_displays_from_stdin(self):
        with patch("sys.stdin", io.StringIO(REPORT)):
            displays = load_displays("-")
        self.assertEqual(len(displays), 2)

    @patch("randr_control.cli.Xrandr")
    def test_load_displays_queries_xrandr(self, xrandr_cls):
        xrandr_cls.return_value.query.side_effect = AcquisitionError("Can't open display")
        with self.assertRaises(AcquisitionError):
            load_displays(None)


if __name__ == "__main__":
    unittest.main()
