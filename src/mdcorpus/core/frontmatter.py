"""Frontmatter extraction: a delimited block of `key: value` lines followed by a body"""

import re

import yaml

from mdcorpus.core.errors import MalformedFrontmatter
from mdcorpus.core.models import FrontmatterBlock


LINE_RE = re.compile(r'^(?P<key>[A-Za-z_][A-Za-z0-9_-]*)[ \t]*:(?:[ \t]+(?P<value>.*?))?[ \t]*$')
UNQUOTED_RE = re.compile(r'^[^:"\']*$|^[^:"\'][^:]*$')
BOM = "\ufeff"


class _FrontmatterDumper(yaml.SafeDumper):
    """SafeDumper that double-quotes any string the line grammar could not read back plain."""


def _represent_str(dumper, value: str):
    style = '"' if ":" in value or not value.isprintable() else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style=style)


_FrontmatterDumper.add_representer(str, _represent_str)


def _decode(raw: str) -> str | None:
    """Return the string value of a raw value token, or None if it is not valid."""
    if not raw.startswith(("\"", "'")):
        return raw if UNQUOTED_RE.match(raw) else None
    try:
        value = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError:
        return None
    return value if isinstance(value, str) else None


def parse_frontmatter(
    text: str,
    delimiter: str = '---',
    path: str = None,
    index: int = None,
    ) -> FrontmatterBlock:
    """Split text into raw metadata fields and body. Values are not interpreted.

    The first line must be the delimiter and a later line must close the block;
    every non-blank, non-comment line in between has to be `key: value`.
    Quoted values ("..." or '...') follow YAML quoting rules and may contain colons.
    A leading byte order mark is ignored.
    """
    def fail(msg: str) -> MalformedFrontmatter:
        return MalformedFrontmatter(msg, path, index)

    lines = text.removeprefix(BOM).splitlines()
    if not lines or lines[0].strip() != delimiter:
        raise fail(f"missing opening delimiter {delimiter!r}")

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == delimiter:
            end_idx = i
            break
    if end_idx is None:
        raise fail(f"missing closing delimiter {delimiter!r}")

    fields: dict[str, str] = {}
    for lineno, line in enumerate(lines[1:end_idx], start=2):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        m = LINE_RE.match(line)
        if not m:
            raise fail(f"line {lineno}: expected 'key: value', got {stripped!r}")
        key, raw = m.group('key'), m.group('value') or ''
        value = _decode(raw)
        if value is None:
            raise fail(f"line {lineno}: invalid value for {key!r} (quote values containing ':')")
        if key in fields:
            raise fail(f"line {lineno}: duplicate key {key!r}")
        fields[key] = value

    body = "\n".join(lines[end_idx + 1:]).lstrip("\n")
    return FrontmatterBlock(fields=fields, body=body)


def dump_frontmatter(block: FrontmatterBlock, delimiter: str = '---') -> str:
    """Serialize a block back to text accepted by parse_frontmatter."""
    lines = [delimiter]
    if block.fields:
        header = yaml.dump(
            block.fields,
            Dumper=_FrontmatterDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=float("inf"),
        )
        lines.append(header.rstrip("\n"))
    lines.append(delimiter)
    if block.body:
        lines.extend(["", block.body])
    return "\n".join(lines) + "\n"
