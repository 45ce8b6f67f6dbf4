from __future__ import annotations

import unittest

from tweetfmt.config_schema import RenderSettings
from tweetfmt.urls import decode_url, status_url, user_url


class TestUrls(unittest.TestCase):
    def test_decode_percent_escapes(self) -> None:
        self.assertEqual(decode_url("https://example.com/%E3%81%82"), "https://example.com/あ")

    def test_decode_punycode_host(self) -> None:
        self.assertEqual(decode_url("https://xn--r8jz45g.jp/path"), "https://例え.jp/path")

    def test_reserved_escapes_stay_encoded(self) -> None:
        url = "https://example.com/search?q=a%26b%3Dc&x=%2F"
        self.assertEqual(decode_url(url), url)

    def test_mixed_escapes_decode_only_unreserved(self) -> None:
        self.assertEqual(
            decode_url("https://example.com/%E3%81%82%2F%E3%81%84?x=%2f"),
            "https://example.com/あ%2Fい?x=%2f",
        )

    def test_invalid_utf8_escape_is_left_encoded(self) -> None:
        self.assertEqual(decode_url("https://example.com/%FF%20a"), "https://example.com/%FF%20a")

    def test_plain_url_unchanged(self) -> None:
        self.assertEqual(decode_url("https://example.com/a"), "https://example.com/a")
        self.assertEqual(decode_url(""), "")

    def test_profile_and_status_urls(self) -> None:
        settings = RenderSettings(hostname="twitter.com")
        self.assertEqual(user_url("bob", settings), "https://twitter.com/bob")
        self.assertEqual(status_url("bob", "42", settings), "https://twitter.com/bob/status/42")


if __name__ == "__main__":
    unittest.main()
