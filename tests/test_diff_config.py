"""
Tests for diff configuration and color parsing.
"""

import unittest

from PD_Libs.DiffLib.diff_config import DiffConfig, parse_color


class TestParseColor(unittest.TestCase):
    """Test parse_color function."""

    def test_hex_rgb(self):
        """Test #rrggbb adds opaque alpha."""
        self.assertEqual(parse_color("#ff7777"), (255, 119, 119, 255))

    def test_hex_rgba(self):
        """Test #rrggbbaa keeps alpha."""
        self.assertEqual(parse_color("#00ff0080"), (0, 255, 0, 128))

    def test_comma_separated(self):
        """Test r,g,b and r,g,b,a forms."""
        self.assertEqual(parse_color("0, 128, 0"), (0, 128, 0, 255))
        self.assertEqual(parse_color("1,2,3,4"), (1, 2, 3, 4))

    def test_invalid_hex(self):
        """Test malformed hex strings."""
        with self.assertRaises(ValueError):
            parse_color("#fff")
        with self.assertRaises(ValueError):
            parse_color("#gggggg")

    def test_invalid_channels(self):
        """Test wrong channel counts and out-of-range values."""
        with self.assertRaises(ValueError):
            parse_color("1,2")
        with self.assertRaises(ValueError):
            parse_color("256,0,0")
        with self.assertRaises(ValueError):
            parse_color("red")


class TestDiffConfig(unittest.TestCase):
    """Test DiffConfig dataclass."""

    def test_defaults(self):
        """Test default configuration."""
        config = DiffConfig()

        self.assertEqual(config.highlight_color, (255, 0, 0, 255))
        self.assertEqual(config.highlight_opacity, 1.0)
        self.assertEqual(config.result_suffix, "_result")
        self.assertIsNone(config.row_workers)

    def test_color_string_is_parsed(self):
        """Test highlight color given as a string."""
        config = DiffConfig(highlight_color="#00ff00")

        self.assertEqual(config.highlight_color, (0, 255, 0, 255))

    def test_rgb_color_gets_alpha(self):
        """Test three-channel colors become opaque RGBA."""
        config = DiffConfig(highlight_color=(1, 2, 3))

        self.assertEqual(config.highlight_color, (1, 2, 3, 255))

    def test_invalid_values(self):
        """Test validation of every field."""
        with self.assertRaises(ValueError):
            DiffConfig(highlight_opacity=0)
        with self.assertRaises(ValueError):
            DiffConfig(highlight_opacity=1.5)
        with self.assertRaises(ValueError):
            DiffConfig(result_suffix="")
        with self.assertRaises(ValueError):
            DiffConfig(row_workers=0)
        with self.assertRaises(TypeError):
            DiffConfig(highlight_color=(1.5, 0, 0, 255))

    def test_to_dict_from_dict(self):
        """Test dictionary conversion, ignoring unknown keys."""
        config = DiffConfig(highlight_color=(0, 0, 255, 255), highlight_opacity=0.25, row_workers=2)

        data = config.to_dict()
        data["unknown"] = True
        restored = DiffConfig.from_dict(data)

        self.assertEqual(restored, config)

    def test_row_workers_string_is_converted(self):
        """Test row_workers read as a string is stored as an int."""
        config = DiffConfig.from_dict({"row_workers": "2"})

        self.assertEqual(config.row_workers, 2)
        self.assertIsInstance(config.row_workers, int)

    def test_from_dict_accepts_json_lists(self):
        """Test colors decoded from JSON as lists."""
        config = DiffConfig.from_dict({"highlight_color": [10, 20, 30, 40]})

        self.assertEqual(config.highlight_color, (10, 20, 30, 40))


if __name__ == "__main__":
    unittest.main()
