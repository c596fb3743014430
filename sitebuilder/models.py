"""Records passed between the parser, the navigation builder and the renderer."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Heading:
    """A heading found while parsing a page."""
    level: int
    text: str  # Heading text with ** markers removed
    id: str


@dataclass
class ParseResult:
    """Everything the renderer and the search index need from one page."""
    html: str
    headings: list = field(default_factory=list)  # Heading, in document order
    frontmatter: dict = field(default_factory=dict)
    plain_text: str = ''


@dataclass
class Preprocessed:
    """Page body after front-matter extraction and GitBook tag rewriting."""
    content: str
    frontmatter: dict = field(default_factory=dict)


@dataclass
class PageRef:
    """A page entry from SUMMARY.md."""
    title: str
    md_path: str  # Source path relative to the content dir
    html_path: str  # Output path relative to the output dir
    path: str  # Site-absolute URL path, unique per page


@dataclass
class NavGroup:
    """A `## Section` of SUMMARY.md and the pages listed under it."""
    title: str
    items: list = field(default_factory=list)  # PageRef


@dataclass
class PrevNext:
    """Neighbours of a page in the flattened navigation order."""
    prev: Optional[PageRef] = None
    next: Optional[PageRef] = None


@dataclass
class SearchRecord:
    """One entry of the client-side search index."""
    title: str
    path: str
    text: str
    headings: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "path": self.path,
            "text": self.text,
            "headings": self.headings,
        }
