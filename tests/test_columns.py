import unittest

from lineup_substitution.columns import (
    TAB_WIDTH,
    build_indentation,
    indentation_contains_tab,
    leading_whitespace_length,
    visual_column,
)
from lineup_substitution.errors import AlignmentInvariantViolation


class TestVisualColumn(unittest.TestCase):

    def test_plain_characters(self):
        self.assertEqual(visual_column("abc", 0), 0)
        self.assertEqual(visual_column("abc", 2), 2)
        self.assertEqual(visual_column("abc", 3), 3)

    def test_tabs_jump_to_next_stop(self):
        self.assertEqual(TAB_WIDTH, 8)
        self.assertEqual(visual_column("\t", 1), 8)
        self.assertEqual(visual_column("ab\tc", 3), 8)
        self.assertEqual(visual_column("ab\tc", 4), 9)
        # A tab already on a tab stop still advances a full stop.
        self.assertEqual(visual_column("12345678\t", 9), 16)

    def test_tabs_and_spaces(self):
        self.assertEqual(visual_column("\t\t   x", 5), 19)
        self.assertEqual(visual_column("   \tx", 4), 8)


class TestIndentationHelpers(unittest.TestCase):

    def test_leading_whitespace_length(self):
        self.assertEqual(leading_whitespace_length("  \t x"), 4)
        self.assertEqual(leading_whitespace_length("x  "), 0)
        self.assertEqual(leading_whitespace_length("   "), 3)
        self.assertEqual(leading_whitespace_length(""), 0)

    def test_indentation_contains_tab(self):
        self.assertTrue(indentation_contains_tab("  \tx"))
        self.assertFalse(indentation_contains_tab("    x\t"))
        self.assertFalse(indentation_contains_tab(""))

    def test_build_indentation(self):
        self.assertEqual(build_indentation(21, True), "\t\t     ")
        self.assertEqual(build_indentation(16, True), "\t\t")
        self.assertEqual(build_indentation(5, True), "     ")
        self.assertEqual(build_indentation(21, False), " " * 21)
        self.assertEqual(build_indentation(0, True), "")

    def test_build_indentation_rejects_negative_width(self):
        with self.assertRaises(AlignmentInvariantViolation):
            build_indentation(-1, False)


if __name__ == '__main__':
    unittest.main()
