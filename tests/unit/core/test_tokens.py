"""Unit tests for core/utils/tokens.py"""

from mdcorpus.core.utils.tokens import WORDS_PER_MINUTE, time_to_read, word_count


def test_word_count_ignores_markup():
    """Headings, emphasis and link targets contribute only their visible words."""
    md = "# Two words\n\nSome **bold** text with [a link](https://example.com/long/url).\n"
    assert word_count(md) == 9


def test_word_count_skips_fenced_code():
    md = "Intro.\n\n```swift\nlet a = 1\nlet b = 2\n```\n"
    assert word_count(md) == 1


def test_time_to_read_minimum_one_minute():
    assert time_to_read("") == 1
    assert time_to_read("short") == 1


def test_time_to_read_rounds_up():
    body = " ".join(["word"] * (WORDS_PER_MINUTE + 1))
    assert time_to_read(body) == 2
