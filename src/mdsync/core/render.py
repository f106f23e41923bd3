"""Serialize a metadata record and top sections back to document text"""

from typing import Optional

from mdsync.core.metadata import FRONTMATTER_DELIMITER
from mdsync.core.models import Document, FrontmatterEntry, FrontmatterFormat, MetadataRecord, TopSection


def render_frontmatter_entry(entry: FrontmatterEntry) -> list[str]:
    """Return the line(s) for one frontmatter entry."""
    values = entry.value if isinstance(entry.value, list) else [entry.value]
    if entry.format is FrontmatterFormat.list:
        return [f"{entry.name}:"] + [f"- {v}" if v else "-" for v in values]
    if entry.format is FrontmatterFormat.array:
        return [f"{entry.name}: [{', '.join(values)}]"]
    return [f"{entry.name}: {', '.join(values)}".rstrip()]


def render_metadata(metadata: Optional[MetadataRecord]) -> str:
    """Frontmatter block, then inline properties, then free text. Empty string for an empty record."""
    if metadata is None or metadata.is_empty():
        return ""

    lines: list[str] = []
    if metadata.frontmatter:
        lines.append(FRONTMATTER_DELIMITER)
        for entry in metadata.frontmatter:
            lines.extend(render_frontmatter_entry(entry))
        lines.append(FRONTMATTER_DELIMITER)
    lines.extend(f"{p.name}:: {p.value}".rstrip() for p in metadata.inline_properties)
    if metadata.remaining_text.strip():
        lines.append(metadata.remaining_text.strip())
    return '\n'.join(lines)


def render_section(section: TopSection) -> str:
    parts = [f"# {section.header}"]
    if section.content.strip():
        parts.append(section.content.strip())
    for sub in section.sub_sections:
        parts.append(f"\n## {sub.header}")
        if sub.content.strip():
            parts.append(sub.content.strip())
    return '\n'.join(parts)


def render(metadata: Optional[MetadataRecord], top_sections: list[TopSection]) -> str:
    """Join the metadata block and each section block with one blank line, skipping empty blocks."""
    blocks = [render_metadata(metadata)] + [render_section(s) for s in top_sections]
    return '\n\n'.join(b for b in blocks if b.strip())


def render_document(document: Document) -> str:
    return render(document.metadata, document.top_sections)
