import unittest

from lineup_substitution.errors import PositionError
from lineup_substitution.text_model import Position, TextModel, split_lines


class TestTextModelAddressing(unittest.TestCase):

    def test_split_lines_keeps_terminators(self):
        self.assertEqual(split_lines("a\r\nb\rc\nd"), (["a", "b", "c", "d"], ["\r\n", "\r", "\n", ""]))
        self.assertEqual(split_lines(""), ([""], [""]))

    def test_mixed_line_endings_round_trip(self):
        text = "a\r\nb\rc\nd"
        model = TextModel(text)
        self.assertEqual(model.line_count, 4)
        self.assertEqual(model.line_ending(0), "\r\n")
        self.assertEqual(model.get_line(1), "b")
        self.assertEqual(model.get_text(), text)

    def test_trailing_newline_gives_empty_last_line(self):
        model = TextModel("a\n")
        self.assertEqual(model.line_count, 2)
        self.assertEqual(model.get_line(1), "")
        self.assertEqual(model.end_position(), Position(1, 0))

    def test_get_text_range(self):
        model = TextModel("one\ntwo\nthree")
        self.assertEqual(model.get_text(Position(0, 1), Position(0, 3)), "ne")
        self.assertEqual(model.get_text(Position(0, 2), Position(2, 2)), "e\ntwo\nth")
        with self.assertRaises(PositionError):
            model.get_text(Position(1, 0), Position(0, 0))

    def test_invalid_positions(self):
        model = TextModel("abc\nd")
        with self.assertRaises(PositionError):
            model.check_position(Position(2, 0))
        with self.assertRaises(IndexError):
            model.check_position(Position(1, 2))
        with self.assertRaises(PositionError):
            model.get_line(-1)

    def test_offsets(self):
        model = TextModel("ab\r\ncd")
        self.assertEqual(model.offset_of(Position(1, 1)), 5)
        self.assertEqual(model.position_at(2), Position(0, 2))
        self.assertEqual(model.position_at(4), Position(1, 0))
        self.assertEqual(model.position_at(6), Position(1, 2))
        with self.assertRaises(PositionError):
            model.position_at(3)  # between \r and \n
        with self.assertRaises(PositionError):
            model.position_at(7)

    def test_text_start(self):
        model = TextModel("   x\n\t  y\n   \n")
        self.assertEqual(model.text_start(0), Position(0, 3))
        self.assertEqual(model.text_start_column(1), 10)
        self.assertIsNone(model.text_start(2))
        self.assertIsNone(model.text_start_column(3))
        self.assertTrue(model.indentation_contains_tab(1))
        self.assertFalse(model.indentation_contains_tab(0))


class TestTextModelEditing(unittest.TestCase):

    def test_insert_single_line(self):
        model = TextModel("hello world")
        end = model.insert(Position(0, 5), ",")
        self.assertEqual(model.get_text(), "hello, world")
        self.assertEqual(end, Position(0, 6))

    def test_insert_multi_line_keeps_original_terminator(self):
        model = TextModel("ab\r\ncd")
        end = model.insert(Position(0, 1), "X\nY")
        self.assertEqual(model.get_text(), "aX\nYb\r\ncd")
        self.assertEqual(model.line_count, 3)
        self.assertEqual(end, Position(1, 1))

    def test_delete_across_lines(self):
        model = TextModel("one\ntwo\nthree")
        model.delete(Position(2, 2), Position(0, 1))
        self.assertEqual(model.get_text(), "oree")
        self.assertEqual(model.line_count, 1)

    def test_replace(self):
        model = TextModel("foo (a,\n     b)")
        end = model.replace(Position(0, 0), Position(0, 3), "quux")
        self.assertEqual(model.get_text(), "quux (a,\n     b)")
        self.assertEqual(end, Position(0, 4))


class TestMarks(unittest.TestCase):

    def test_gravity_on_replace(self):
        model = TextModel("abcdef")
        right = model.create_mark(Position(0, 3))
        left = model.create_mark(Position(0, 3), left_gravity=True)
        model.replace(Position(0, 0), Position(0, 3), "XY")
        self.assertEqual(model.get_position(right), Position(0, 2))
        self.assertEqual(model.get_position(left), Position(0, 0))

    def test_marks_after_edit_shift(self):
        model = TextModel("a\nbcd")
        mark = model.create_mark(Position(1, 1))
        model.insert(Position(0, 0), "x\ny\n")
        self.assertEqual(model.get_position(mark), Position(3, 1))
        model.delete(Position(0, 0), Position(2, 0))
        self.assertEqual(model.get_position(mark), Position(1, 1))

    def test_marks_on_edited_line(self):
        model = TextModel("abcdef")
        inside = model.create_mark(Position(0, 4))
        after = model.create_mark(Position(0, 6))
        before = model.create_mark(Position(0, 1))
        model.delete(Position(0, 2), Position(0, 5))
        self.assertEqual(model.get_position(inside), Position(0, 2))
        self.assertEqual(model.get_position(after), Position(0, 3))
        self.assertEqual(model.get_position(before), Position(0, 1))

    def test_mark_moves_to_new_line_on_multi_line_insert(self):
        model = TextModel("abcdef")
        mark = model.create_mark(Position(0, 4))
        model.insert(Position(0, 2), "1\n22")
        self.assertEqual(model.get_text(), "ab1\n22cdef")
        self.assertEqual(model.get_position(mark), Position(1, 4))

    def test_deleted_mark(self):
        model = TextModel("abc")
        mark = model.create_mark(Position(0, 1))
        model.delete_mark(mark)
        self.assertTrue(mark.deleted)
        with self.assertRaises(PositionError):
            model.get_position(mark)
        with self.assertRaises(PositionError):
            TextModel("abc").get_position(model.create_mark(Position(0, 0)))


if __name__ == '__main__':
    unittest.main()
