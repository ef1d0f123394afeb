"""Tests for description sanitization."""

import pytest

from sitehealth.sanitizer import DescriptionSanitizer


@pytest.fixture
def sanitizer():
    return DescriptionSanitizer()


class TestDescriptionSanitizer:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Plain text", "Plain text"),
            ("<p>Hello <strong>world</strong></p>", "<p>Hello <strong>world</strong></p>"),
            ("Line one<br/>Line two<BR>", "Line one<br>Line two<br>"),
            ("<ul><li>a</li><li>b</li></ul>", "<ul><li>a</li><li>b</li></ul>"),
            ("<code>x = 1</code>", "<code>x = 1</code>"),
        ],
    )
    def test_allowed_markup_survives(self, sanitizer, raw, expected):
        assert sanitizer.sanitize(raw) == expected

    def test_attributes_are_stripped(self, sanitizer):
        raw = '<p onclick="steal()" style="color:red">Hi</p>'
        assert sanitizer.sanitize(raw) == "<p>Hi</p>"

    def test_links_are_reduced_to_text(self, sanitizer):
        raw = 'See <a href="https://example.com">the docs</a>.'
        assert sanitizer.sanitize(raw) == "See the docs."

    def test_script_and_style_blocks_removed_with_content(self, sanitizer):
        raw = "<script>alert('x')</script>ok<style>p{}</style><iframe src=x></iframe>"
        assert sanitizer.sanitize(raw) == "ok"

    def test_unclosed_script_removed(self, sanitizer):
        assert sanitizer.sanitize("safe<script>alert(1)") == "safe"

    def test_stray_angle_brackets_escaped(self, sanitizer):
        assert sanitizer.sanitize("1 < 2 and 3 > 2") == "1 &lt; 2 and 3 &gt; 2"

    def test_attribute_containing_angle_bracket(self, sanitizer):
        assert sanitizer.sanitize('<p title="a>b">x</p>') == "<p>x</p>"

    def test_comments_removed(self, sanitizer):
        assert sanitizer.sanitize("a<!-- hidden -->b") == "ab"

    def test_empty(self, sanitizer):
        assert sanitizer.sanitize("") == ""
