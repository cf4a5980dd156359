"""Shared markdown-it token utilities"""

import math

from markdown_it import MarkdownIt


WORDS_PER_MINUTE = 265

_TEXT_CHILDREN = {'text', 'code_inline'}


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def word_count(markdown: str, parser: MarkdownIt = None) -> int:
    """Count words in rendered text, ignoring markup, link targets and code fences."""
    parser = parser or make_parser()
    words = 0
    for tok in parser.parse(markdown):
        if tok.type != 'inline' or not tok.children:
            continue
        for child in tok.children:
            if child.type in _TEXT_CHILDREN:
                words += len(child.content.split())
    return words


def time_to_read(markdown: str, parser: MarkdownIt = None) -> int:
    """Estimated reading time in whole minutes (at least 1)."""
    return max(1, math.ceil(word_count(markdown, parser) / WORDS_PER_MINUTE))
