"""Pre-header metadata: frontmatter and inline property parsing, and record merging"""

import logging
import re
from typing import Optional, TypeVar

from mdsync.core.models import FrontmatterEntry, FrontmatterFormat, InlineProperty, MetadataRecord


log = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"
BARE_PROPERTY_RE = re.compile(r'^([^:\[\]]+)::(.*)$')
BRACKET_PROPERTY_RE = re.compile(r'\[([^:\[\]]+?)::([^\]]*?)\]')

_Named = TypeVar("_Named", FrontmatterEntry, InlineProperty)


def split_lines(text: str) -> list[str]:
    """Split on '\\n' only (dropping a trailing '\\r'); form feeds and Unicode separators stay inside lines."""
    return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _list_item(line: str) -> str:
    """Strip the bullet dash and one trailing colon from a list item line."""
    item = line[1:].strip()
    if item.endswith(':'):
        item = item[:-1].strip()
    return item


def _entry(name: str, value: str) -> FrontmatterEntry:
    """Build a SINGLE or ARRAY entry from a non-empty `name: value` pair."""
    if value.startswith('[') and value.endswith(']'):
        inner = value[1:-1].strip()
        items = [v.strip() for v in inner.split(',')] if inner else []
        return FrontmatterEntry(name=name, value=items, format=FrontmatterFormat.array)
    return FrontmatterEntry(name=name, value=value, format=FrontmatterFormat.single)


def parse_frontmatter(content: str) -> list[FrontmatterEntry]:
    """Parse the lines between `---` delimiters into entries, in first-appearance order.

    A repeated name keeps the position of its first occurrence and the value of its last.
    """
    entries: dict[str, FrontmatterEntry] = {}
    list_name: Optional[str] = None
    list_items: list[str] = []

    def _close_list() -> None:
        nonlocal list_name
        if list_name is not None:
            entries[list_name] = FrontmatterEntry(
                name=list_name, value=list(list_items), format=FrontmatterFormat.list)
            list_name = None

    for raw in split_lines(content):
        line = raw.strip()
        if not line or line == FRONTMATTER_DELIMITER:
            continue

        if list_name is not None and (_indent(raw) > 0 or line.startswith('-')):
            if line.startswith('-'):
                list_items.append(_list_item(line))
            else:
                log.debug("Skipping nested frontmatter line under %r: %r", list_name, line)
            continue

        _close_list()
        if _indent(raw) > 0:
            log.debug("Skipping indented frontmatter line: %r", line)
            continue

        name, sep, value = line.partition(':')
        name, value = name.strip(), value.strip()
        if not sep or not name:
            log.debug("Skipping malformed frontmatter line: %r", line)
            continue

        if not value:
            list_name, list_items = name, []
            entries.setdefault(name, FrontmatterEntry(name=name, value=[], format=FrontmatterFormat.list))
            continue
        entries[name] = _entry(name, value)

    _close_list()
    return list(entries.values())


def parse_inline_properties(content: str) -> tuple[list[InlineProperty], str]:
    """Extract `name:: value` lines and `[name:: value]` spans; return (properties, remaining_text)."""
    properties: list[InlineProperty] = []
    remaining: list[str] = []

    for line in split_lines(content):
        bare = BARE_PROPERTY_RE.match(line.strip())
        if bare and bare.group(1).strip():
            properties.append(InlineProperty(name=bare.group(1).strip(), value=bare.group(2).strip()))
            continue

        found = [m for m in BRACKET_PROPERTY_RE.finditer(line) if m.group(1).strip()]
        for m in found:
            properties.append(InlineProperty(name=m.group(1).strip(), value=m.group(2).strip()))
            line = line.replace(m.group(0), '', 1)
        if found:
            line = line.strip()

        if line.strip():
            remaining.append(line)

    return properties, '\n'.join(remaining).strip()


def split_frontmatter(text: str) -> tuple[Optional[str], str]:
    """Return (frontmatter_block, rest). Block is None when absent or unterminated."""
    lines = split_lines(text)
    start = next((i for i, line in enumerate(lines) if line.strip()), None)
    if start is None or lines[start].strip() != FRONTMATTER_DELIMITER:
        return None, text

    for end in range(start + 1, len(lines)):
        if lines[end].strip() == FRONTMATTER_DELIMITER:
            return '\n'.join(lines[start + 1:end]), '\n'.join(lines[end + 1:])

    log.debug("Unterminated frontmatter block; treating it as plain text")
    return None, text


def parse_metadata(text: str) -> MetadataRecord:
    """Parse pre-header text into a MetadataRecord. Never raises on malformed input."""
    if not text.strip():
        return MetadataRecord()

    block, rest = split_frontmatter(text)
    frontmatter = parse_frontmatter(block) if block is not None else []
    properties, remaining = parse_inline_properties(rest)
    return MetadataRecord(frontmatter=frontmatter, inline_properties=properties, remaining_text=remaining)


def _union_by_name(template: list[_Named], target: list[_Named]) -> list[_Named]:
    """One item per name: template names first, then target-only names; target values win."""
    template_by_name = {item.name: item for item in template}
    target_by_name = {item.name: item for item in target}

    merged: list[_Named] = []
    seen: set[str] = set()
    for item in (*template, *target):
        if item.name in seen:
            continue
        seen.add(item.name)
        winner = target_by_name[item.name] if item.name in target_by_name else template_by_name[item.name]
        merged.append(winner)
    return merged


def merge_metadata(
    template: Optional[MetadataRecord],
    target: Optional[MetadataRecord],
    ) -> MetadataRecord:
    """Merge two records; the target wins on overlapping names and on free text."""
    if template is None:
        return target if target is not None else MetadataRecord()
    if target is None:
        return template

    return MetadataRecord(
        frontmatter=_union_by_name(template.frontmatter, target.frontmatter),
        inline_properties=_union_by_name(template.inline_properties, target.inline_properties),
        remaining_text=target.remaining_text.strip() or template.remaining_text.strip(),
    )
