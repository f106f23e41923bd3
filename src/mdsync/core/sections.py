"""Split document text into a metadata section and two levels of header sections"""

import logging
import re
from enum import Enum
from typing import Optional

from mdsync.core.metadata import parse_metadata, split_lines
from mdsync.core.models import Document, MetadataSection, SubSection, TopSection


log = logging.getLogger(__name__)

SECTION_HEADING_RE = re.compile(r'^#{1,2}\s')
TOP_HEADING_RE = re.compile(r'^#\s')
SUB_HEADING_RE = re.compile(r'^##\s')


class ParseState(Enum):
    NONE = "none"                   # outside any section; lines are ignored
    IN_METADATA = "in_metadata"     # before the first heading
    IN_TOP = "in_top"
    IN_SUB = "in_sub"


def join_content(lines: list[str]) -> str:
    """Join buffered body lines, dropping fully blank ones, and trim the result."""
    return '\n'.join(line for line in lines if line.strip()).strip()


class Sectionizer:
    """Line-driven state machine; every state transition flushes the buffer it leaves."""

    def __init__(self) -> None:
        self.state = ParseState.IN_METADATA
        self.metadata_lines: list[str] = []
        self.sections: list[TopSection] = []
        self._top_header: Optional[str] = None
        self._top_lines: list[str] = []
        self._subs: list[SubSection] = []
        self._sub_header: Optional[str] = None
        self._sub_lines: list[str] = []

    def feed(self, line: str) -> None:
        if self.state is ParseState.IN_METADATA:
            if not SECTION_HEADING_RE.match(line):
                if line.strip():
                    self.metadata_lines.append(line)
                return
            self.state = ParseState.NONE

        if TOP_HEADING_RE.match(line):
            self.flush_top()
            self._top_header = line[1:].strip()
            self.state = ParseState.IN_TOP
        elif SUB_HEADING_RE.match(line):
            if self.state is ParseState.NONE:
                log.debug("Discarding subsection with no open top section: %r", line.strip())
                return
            self.flush_sub()
            self._sub_header = line[2:].strip()
            self.state = ParseState.IN_SUB
        elif self.state is ParseState.IN_SUB:
            self._sub_lines.append(line)
        elif self.state is ParseState.IN_TOP:
            self._top_lines.append(line)

    def flush_sub(self) -> None:
        """Close the open subsection (if any) and return to IN_TOP."""
        if self.state is not ParseState.IN_SUB:
            return
        self._subs.append(SubSection(header=self._sub_header, content=join_content(self._sub_lines)))
        self._sub_header, self._sub_lines = None, []
        self.state = ParseState.IN_TOP

    def flush_top(self) -> None:
        """Close the open top section and its pending subsection, then return to NONE."""
        self.flush_sub()
        if self.state is not ParseState.IN_TOP:
            return
        self.sections.append(TopSection(
            header=self._top_header,
            content=join_content(self._top_lines),
            sub_sections=self._subs,
        ))
        self._top_header, self._top_lines, self._subs = None, [], []
        self.state = ParseState.NONE

    def finish(self) -> Document:
        self.flush_top()
        sections: list = []
        metadata_text = '\n'.join(self.metadata_lines).strip()
        if metadata_text:
            sections.append(MetadataSection(metadata=parse_metadata(metadata_text)))
        sections.extend(self.sections)
        return Document(sections=sections)


def sectionize(text: str) -> Document:
    """Parse text into a Document. Duplicate headers are kept in document order."""
    sectionizer = Sectionizer()
    for line in split_lines(text):
        sectionizer.feed(line)
    return sectionizer.finish()


def find_duplicate_headers(sections: list[TopSection]) -> dict[str, list[TopSection]]:
    """Map each header that occurs more than once to its sections, in order."""
    by_header: dict[str, list[TopSection]] = {}
    for section in sections:
        by_header.setdefault(section.header, []).append(section)
    return {header: group for header, group in by_header.items() if len(group) > 1}


def combine_header_sections(sections: list[TopSection]) -> TopSection:
    """Fold same-header sections into the first: bodies joined by a blank line, first's subsections kept."""
    if not sections:
        raise ValueError("combine_header_sections needs at least one section")
    first = sections[0]
    return TopSection(
        header=first.header,
        content='\n\n'.join(s.content for s in sections),
        sub_sections=first.sub_sections,
    )
