import unittest

from tabgarden.icons import ICONS, get_icon


class IconTests(unittest.TestCase):
    def test_size_and_color_are_substituted(self):
        svg = get_icon("leaf", 32, "#ff0000")
        self.assertIn('width="32"', svg)
        self.assertIn('height="32"', svg)
        self.assertIn('stroke="#ff0000"', svg)
        self.assertNotIn('stroke="currentColor"', svg)

    def test_defaults_return_markup_unchanged(self):
        self.assertEqual(get_icon("flower"), ICONS["flower"])

    def test_unknown_icon_is_logged_and_empty(self):
        with self.assertLogs("tabgarden.icons", level="WARNING") as logs:
            self.assertEqual(get_icon("cactus"), "")
        self.assertIn("cactus", logs.output[0])


if __name__ == "__main__":
    unittest.main()
