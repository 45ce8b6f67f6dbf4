from __future__ import annotations

import unittest

from tweetfmt import graphemes


class TestGraphemes(unittest.TestCase):
    def test_ascii_is_one_cluster_per_char(self) -> None:
        self.assertEqual(graphemes.split("abc"), ["a", "b", "c"])

    def test_empty_string(self) -> None:
        self.assertEqual(graphemes.split(""), [])
        self.assertEqual(graphemes.length(""), 0)

    def test_flag_sequence_is_single_cluster(self) -> None:
        self.assertEqual(graphemes.split("\U0001F1EF\U0001F1F5!"), ["\U0001F1EF\U0001F1F5", "!"])

    def test_zwj_family_is_single_cluster(self) -> None:
        family = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
        self.assertEqual(graphemes.length(family), 1)

    def test_combining_mark_joins_base(self) -> None:
        self.assertEqual(graphemes.split("e\u0301x"), ["e\u0301", "x"])


if __name__ == "__main__":
    unittest.main()
