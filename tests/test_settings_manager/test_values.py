"""Tests for value normalisation helpers."""

import unittest

from settings_manager.values import (
    collapse_value_label,
    decode_json_string,
    is_empty_value,
    values_differ,
)


class TestIsEmptyValue(unittest.TestCase):

    def test_empty_values(self):
        for value in (None, "", {}, [], (), set()):
            self.assertTrue(is_empty_value(value), repr(value))

    def test_numbers_and_booleans_never_empty(self):
        for value in (0, 0.0, False, True, -1):
            self.assertFalse(is_empty_value(value), repr(value))

    def test_non_empty_values(self):
        for value in ("0", " ", {"a": 1}, [0], object()):
            self.assertFalse(is_empty_value(value), repr(value))


class TestDecodeJsonString(unittest.TestCase):

    def test_object(self):
        self.assertEqual(decode_json_string('{"a": 1}'), {"a": 1})

    def test_array(self):
        self.assertEqual(decode_json_string("[1, 2]"), [1, 2])

    def test_invalid(self):
        self.assertEqual(decode_json_string("{oops"), "{oops")

    def test_plain_string_untouched(self):
        self.assertEqual(decode_json_string('"quoted"'), '"quoted"')
        self.assertEqual(decode_json_string("123"), "123")

    def test_non_string_untouched(self):
        self.assertEqual(decode_json_string(5), 5)


class TestCollapseValueLabel(unittest.TestCase):

    def test_pair(self):
        self.assertEqual(collapse_value_label({"value": "US", "label": "United States"}), "US")

    def test_any_second_key(self):
        self.assertEqual(collapse_value_label({"value": 3, "id": 9}), 3)

    def test_none_value_kept(self):
        pair = {"value": None, "label": "Nothing"}
        self.assertEqual(collapse_value_label(pair), pair)

    def test_wrong_size_kept(self):
        self.assertEqual(collapse_value_label({"value": 1}), {"value": 1})

    def test_without_value_key(self):
        self.assertEqual(collapse_value_label({"a": 1, "b": 2}), {"a": 1, "b": 2})


class TestValuesDiffer(unittest.TestCase):

    def test_equal(self):
        self.assertFalse(values_differ("a", "a"))
        self.assertFalse(values_differ({"a": [1, 2]}, {"a": [1, 2]}))

    def test_type_strict(self):
        self.assertTrue(values_differ(1, 1.0))
        self.assertTrue(values_differ(1, True))
        self.assertTrue(values_differ(0, False))

    def test_nested_type_strict(self):
        self.assertTrue(values_differ({"a": 1}, {"a": True}))
        self.assertTrue(values_differ([1], [1.0]))

    def test_different_keys(self):
        self.assertTrue(values_differ({"a": 1}, {"b": 1}))

    def test_tuple_matches_list(self):
        self.assertFalse(values_differ((1, 2), [1, 2]))
        self.assertFalse(values_differ({"a": (1, "x")}, {"a": [1, "x"]}))
        self.assertTrue(values_differ((1,), [1.0]))
        self.assertTrue(values_differ((1, 2), [1, 2, 3]))


if __name__ == "__main__":
    unittest.main()
