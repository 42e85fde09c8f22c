import unittest
from randr_control.xrandr.parser import HeaderLine, ModeLine, classify_line, parse_query, parse_rates


QUERY_OUTPUT = """Screen 0: minimum 320 x 200, current 3840 x 1080, maximum 16384 x 16384
eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 344mm x 194mm
   1920x1080     60.00*+  59.97    59.96    48.00
   1680x1050     59.95    59.88
   1280x720      60.00    59.99    59.86    59.74
HDMI-1 disconnected (normal left inverted right x axis y axis)
DP-1 connected 1920x1080+1920+0 (normal left inverted right x axis y axis) 527mm x 296mm
   2560x1440     59.95 +
   1920x1080     75.00*   60.00    50.00
   1280x720      60.00
DP-2 disconnected (normal left inverted right x axis y axis)
"""


class TestClassifyLine(unittest.TestCase):
    def test_header(self):
        self.assertEqual(
            classify_line("DP-1 connected 1920x1080+0+0 (normal) 527mm x 296mm"),
            HeaderLine(name="DP-1", connected=True),
        )
        self.assertEqual(classify_line("HDMI-1 disconnected (normal)"), HeaderLine(name="HDMI-1", connected=False))

    def test_mode_line(self):
        line = classify_line("   1920x1080     60.00*+  59.94")
        self.assertIsInstance(line, ModeLine)
        self.assertEqual((line.width, line.height), (1920, 1080))
        self.assertIn("59.94", line.rates)

    def test_ignored(self):
        self.assertIsNone(classify_line("Screen 0: minimum 320 x 200, current 1920 x 1080"))
        self.assertIsNone(classify_line(""))
        self.assertIsNone(classify_line("1920x1080 60.00"))
        self.assertIsNone(classify_line("DP-1 connectedish"))


class TestParseRates(unittest.TestCase):
    def test_markers(self):
        self.assertEqual(parse_rates("60.00*+  59.94    50.00"), [(60.0, True), (59.94, False), (50.0, False)])

    def test_preferred_only(self):
        self.assertEqual(parse_rates("59.95 +"), [(59.95, False)])

    def test_malformed_token_skipped(self):
        self.assertEqual(parse_rates("60.0.0  . 75.00*"), [(75.0, True)])


class TestParseQuery(unittest.TestCase):
    def test_displays_in_order(self):
        displays = parse_query(QUERY_OUTPUT)
        self.assertEqual([d.name for d in displays], ["eDP-1", "HDMI-1", "DP-1", "DP-2"])
        self.assertEqual([d.connected for d in displays], [True, False, True, False])

    def test_modes_and_current(self):
        edp = parse_query(QUERY_OUTPUT)[0]
        self.assertEqual(len(edp.modes), 10)
        self.assertEqual((edp.current.width, edp.current.height, edp.current.rate), (1920, 1080, 60.0))
        self.assertTrue(edp.current.current)
        self.assertEqual(sum(m.current for m in edp.modes), 1)

    def test_three_rates_for_one_resolution(self):
        displays = parse_query("DP-1 connected\n   1920x1080     60.00*  59.94  50.00\n")
        modes = displays[0].modes
        self.assertEqual([(m.width, m.height) for m in modes], [(1920, 1080)] * 3)
        self.assertEqual([m.rate for m in modes], [60.0, 59.94, 50.0])
        self.assertEqual([m.current for m in modes], [True, False, False])

    def test_disconnected_display_has_no_modes(self):
        out = "HDMI-1 disconnected\n   1920x1080     60.00*\nDP-1 connected\n   1280x720  60.00\n"
        hdmi, dp = parse_query(out)
        self.assertEqual(hdmi.modes, ())
        self.assertIsNone(hdmi.current)
        self.assertEqual(len(dp.modes), 1)

    def test_mode_lines_before_header_ignored(self):
        out = "   1920x1080     60.00*\nDP-1 connected\n"
        displays = parse_query(out)
        self.assertEqual(len(displays), 1)
        self.assertEqual(displays[0].modes, ())
        self.assertIsNone(displays[0].current)

    def test_last_display_is_kept(self):
        displays = parse_query("DP-1 connected\n   800x600  60.00")
        self.assertEqual(len(displays), 1)
        self.assertEqual(displays[0].modes[0].rate, 60.0)

    def test_duplicates_preserved(self):
        out = "DP-1 connected\n   1920x1080  60.00\n   1920x1080  60.00\n"
        self.assertEqual(len(parse_query(out)[0].modes), 2)

    def test_last_current_wins(self):
        out = "DP-1 connected\n   1920x1080  60.00*\n   1280x720  75.00*\n"
        display = parse_query(out)[0]
        self.assertEqual(display.current.rate, 75.0)
        self.assertEqual([m.current for m in display.modes], [False, True])

    def test_empty_and_garbage(self):
        self.assertEqual(parse_query(""), [])
        self.assertEqual(parse_query("garbage\n\n  more garbage\n"), [])


if __name__ == "__main__":
    unittest.main()
