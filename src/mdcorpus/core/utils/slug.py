"""Slug generation for document identifiers"""

import re
from pathlib import PurePosixPath


FRAGMENT_SEPARATOR = "--"


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def path_slug(path: str) -> str:
    """Slug for a source path: suffix removed, trailing `index` dropped, parts joined by '-'."""
    parts = list(PurePosixPath(path).with_suffix('').parts)
    if len(parts) > 1 and parts[-1].lower() == 'index':
        parts.pop()
    return slugify('-'.join(p for p in parts if p not in ('/', '.', '..')))


def make_slug(path: str, index: int) -> str:
    """Slug for fragment `index` of `path`.

    slugify never emits '--', so fragment slugs cannot collide with another
    file's base slug.
    """
    base = path_slug(path) or "doc"
    return base if index == 0 else f"{base}{FRAGMENT_SEPARATOR}{index}"
