"""Template-ordered merge of two sectionized documents"""

import logging

from mdsync.core.metadata import merge_metadata
from mdsync.core.models import Document, MetadataSection, SubSection, TopSection


log = logging.getLogger(__name__)


def _joined(contents: list[str]) -> str:
    """Newline-join the trimmed, non-empty contents."""
    return '\n'.join(c.strip() for c in contents if c.strip())


def _trimmed(section: TopSection) -> TopSection:
    return TopSection(
        header=section.header,
        content=section.content.strip(),
        sub_sections=[SubSection(header=s.header, content=s.content.strip()) for s in section.sub_sections],
    )


def _merge_sub_sections(template: TopSection, matches: list[TopSection]) -> list[SubSection]:
    """Template subsections in template order, then unconsumed target subsections in target order."""
    target_subs = [sub for section in matches for sub in section.sub_sections]
    consumed: set[str] = set()
    merged: list[SubSection] = []

    for template_sub in template.sub_sections:
        same = [s for s in target_subs if s.header == template_sub.header]
        if same:
            consumed.add(template_sub.header)
            content = _joined([s.content for s in same]) or template_sub.content.strip()
        else:
            content = template_sub.content.strip()
        merged.append(SubSection(header=template_sub.header, content=content))

    merged.extend(
        SubSection(header=s.header, content=s.content.strip())
        for s in target_subs if s.header not in consumed
    )
    return merged


def merge_sections(template_top: list[TopSection], target_top: list[TopSection]) -> list[TopSection]:
    """Merge top sections: template order governs, target content wins where present."""
    remaining = list(target_top)
    merged: list[TopSection] = []

    for template in template_top:
        matches = [s for s in remaining if s.header == template.header]
        if not matches:
            log.debug("No target section for %r; using template content", template.header)
            merged.append(_trimmed(template))
            continue

        log.debug("Merging %d target section(s) into %r", len(matches), template.header)
        merged.append(TopSection(
            header=template.header,
            content=_joined([s.content for s in matches]) or template.content.strip(),
            sub_sections=_merge_sub_sections(template, matches),
        ))
        remaining = [s for s in remaining if s.header != template.header]

    if remaining:
        log.debug("Appending %d target-only section(s)", len(remaining))
    merged.extend(_trimmed(s) for s in remaining)
    return merged


def merge_documents(template: Document, target: Document) -> Document:
    """Merge metadata records and top sections into a new Document."""
    metadata = merge_metadata(template.metadata, target.metadata)
    sections: list = []
    if not metadata.is_empty():
        sections.append(MetadataSection(metadata=metadata))
    sections.extend(merge_sections(template.top_sections, target.top_sections))
    return Document(sections=sections)
