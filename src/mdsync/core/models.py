"""Document model: metadata records and the tagged union of section kinds"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FrontmatterFormat(str, Enum):
    single = "single"
    list = "list"
    array = "array"


class FrontmatterEntry(BaseModel):
    """One `name: value` entry of the `---` block. SINGLE values are plain strings."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Union[str, list[str]]
    format: FrontmatterFormat = FrontmatterFormat.single


class InlineProperty(BaseModel):
    """A `name:: value` annotation."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class MetadataRecord(BaseModel):
    """Pre-header content: frontmatter, inline properties and leftover free text."""
    model_config = ConfigDict(frozen=True)

    frontmatter: list[FrontmatterEntry] = Field(default_factory=list)
    inline_properties: list[InlineProperty] = Field(default_factory=list)
    remaining_text: str = ""

    def is_empty(self) -> bool:
        return not (self.frontmatter or self.inline_properties or self.remaining_text.strip())


class SubSection(BaseModel):
    """Level-2 (`## `) section, owned by a TopSection."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["sub"] = "sub"
    header: str
    content: str = ""


class TopSection(BaseModel):
    """Level-1 (`# `) section. Headers are not unique within a document."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["top"] = "top"
    header: str
    content: str = ""
    sub_sections: list[SubSection] = Field(default_factory=list)


class MetadataSection(BaseModel):
    """Wraps the pre-header MetadataRecord; first section of a document when present."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["metadata"] = "metadata"
    metadata: MetadataRecord


Section = Annotated[Union[MetadataSection, TopSection, SubSection], Field(discriminator="kind")]


class Document(BaseModel):
    """Ordered sections: an optional MetadataSection followed by TopSections."""
    model_config = ConfigDict(frozen=True)

    sections: list[Section] = Field(default_factory=list)

    @property
    def metadata(self) -> Optional[MetadataRecord]:
        for section in self.sections:
            if section.kind == "metadata":
                return section.metadata
        return None

    @property
    def top_sections(self) -> list[TopSection]:
        return [s for s in self.sections if s.kind == "top"]
