from __future__ import annotations

import unittest

from tweetfmt.errors import UnexpectedPlaceholderError
from tweetfmt.fields import TWEET_FIELDS
from tweetfmt.placeholders import PlaceholderNode, TextNode, parse, suggest_fields


class TestParse(unittest.TestCase):
    def test_empty_template(self) -> None:
        self.assertEqual(parse("", TWEET_FIELDS), ())

    def test_literal_only_is_single_text_node(self) -> None:
        self.assertEqual(parse("just text {x} $y", ("a",)), (TextNode("just text {x} $y"),))

    def test_parse(self) -> None:
        nodes = parse("[${tweet.url} @${user.username}]", TWEET_FIELDS)
        self.assertEqual(
            nodes,
            (
                TextNode("["),
                PlaceholderNode("tweet.url"),
                TextNode(" @"),
                PlaceholderNode("user.username"),
                TextNode("]"),
            ),
        )

    def test_escaped_placeholder_keeps_backslash(self) -> None:
        nodes = parse("[\\${tweet.url} @${user.username}]", TWEET_FIELDS)
        self.assertEqual(
            nodes,
            (
                TextNode("[\\${tweet.url} @"),
                PlaceholderNode("user.username"),
                TextNode("]"),
            ),
        )

    def test_escaped_placeholder_with_no_fields(self) -> None:
        self.assertEqual(parse("\\${x}", ()), (TextNode("\\${x}"),))

    def test_connected_placeholders(self) -> None:
        nodes = parse("${tweet.url}${user.username}", TWEET_FIELDS)
        self.assertEqual(
            nodes,
            (PlaceholderNode("tweet.url"), PlaceholderNode("user.username")),
        )

    def test_empty_placeholder_is_rejected(self) -> None:
        with self.assertRaises(UnexpectedPlaceholderError) as ctx:
            parse("${}", TWEET_FIELDS)
        self.assertEqual(ctx.exception.field, "")
        self.assertEqual(ctx.exception.suggestions, ())

    def test_unknown_field(self) -> None:
        with self.assertRaises(UnexpectedPlaceholderError) as ctx:
            parse("${bogus}", ("a", "b"))
        err = ctx.exception
        self.assertEqual(err.field, "bogus")
        self.assertEqual(err.fields, ("a", "b"))
        self.assertIsNone(err.slot)

    def test_unknown_field_suggestions_are_ranked(self) -> None:
        with self.assertRaises(UnexpectedPlaceholderError) as ctx:
            parse("[${tweet.url} @${user.usrname}]", TWEET_FIELDS)
        err = ctx.exception
        self.assertEqual(err.field, "user.usrname")
        self.assertEqual(err.suggestions[:2], ("user.username", "user.name"))
        self.assertLessEqual(len(err.suggestions), 3)
        self.assertIn('Did you mean "user.username" / "user.name"', str(err))

    def test_unclosed_placeholder_is_literal(self) -> None:
        self.assertEqual(parse("${tweet.id", TWEET_FIELDS), (TextNode("${tweet.id"),))

    def test_unclosed_placeholder_does_not_reach_past_newline(self) -> None:
        self.assertEqual(
            parse("cost ${\n${tweet.text}", TWEET_FIELDS),
            (TextNode("cost ${\n"), PlaceholderNode("tweet.text")),
        )


class TestSuggestFields(unittest.TestCase):
    def test_no_match_below_cutoff(self) -> None:
        self.assertEqual(suggest_fields("zzz", ["text", "tag"]), [])

    def test_ties_keep_declaration_order(self) -> None:
        self.assertEqual(suggest_fields("ac", ["ab", "ca"], cutoff=0.5), ["ab", "ca"])
        self.assertEqual(suggest_fields("ac", ["ca", "ab"], cutoff=0.5), ["ca", "ab"])

    def test_bounded_count(self) -> None:
        out = suggest_fields("date.x", ["date.a", "date.b", "date.c", "date.d"], n=2)
        self.assertEqual(out, ["date.a", "date.b"])


if __name__ == "__main__":
    unittest.main()
