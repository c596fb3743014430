"""Parse GitBook SUMMARY.md into navigation groups and a flat page order."""

import os
import re
from typing import Optional

from .errors import SummaryNotFoundError
from .models import NavGroup, PageRef, PrevNext


GROUP_HEADING = re.compile(r'^##\s+(.+)$')
PAGE_ENTRY = re.compile(r'^\*\s+\[([^\]]+)\]\(([^)]+)\)')
# GitBook appends anchors to headings (e.g., ## Title <a href="..." id="..."></a>)
HEADING_ANCHOR = re.compile(r'\s*<a[^>]*>.*?</a>\s*')


def parse_summary(content: str) -> list[NavGroup]:
    """
    Parse a SUMMARY.md file into navigation groups.

    Only `## Group` headings and top-level `* [Title](path.md)` entries are
    recognized; every other line is ignored. Entries that appear before the
    first group go into an untitled group kept at the front.
    """
    groups = []
    current_group = None

    for line in content.split('\n'):
        line = line.rstrip('\r')

        group_match = GROUP_HEADING.match(line)
        if group_match:
            title = HEADING_ANCHOR.sub('', group_match.group(1)).strip()
            current_group = NavGroup(title=title)
            groups.append(current_group)
            continue

        entry_match = PAGE_ENTRY.match(line)
        if not entry_match:
            continue

        page = make_page_ref(entry_match.group(1).strip(), entry_match.group(2).strip())

        if current_group is not None:
            current_group.items.append(page)
        else:
            # No group yet, collect into the untitled leading group
            if not groups or groups[0].title != '':
                groups.insert(0, NavGroup(title=''))
            groups[0].items.append(page)

    return groups


def make_page_ref(title: str, md_path: str) -> PageRef:
    html_path = to_html_path(md_path)
    return PageRef(title=title, md_path=md_path, html_path=html_path, path='/' + html_path)


def to_html_path(md_path: str) -> str:
    """Convert a GitBook file path to the generated page's path.

    README.md is the index of its directory; other pages swap .md for .html.
    """
    if md_path == 'README.md':
        return 'index.html'
    path = re.sub(r'README\.md$', 'index.html', md_path)
    return re.sub(r'\.md$', '.html', path)


def flatten_nav(groups: list[NavGroup]) -> list[PageRef]:
    """Concatenate group items in order; this is the prev/next page order."""
    pages = []
    for group in groups:
        pages.extend(group.items)
    return pages


def prev_next(pages: list[PageRef], path: str) -> Optional[PrevNext]:
    """Find the neighbours of the page at `path`, or None if it isn't listed."""
    for idx, page in enumerate(pages):
        if page.path == path:
            return PrevNext(
                prev=pages[idx - 1] if idx > 0 else None,
                next=pages[idx + 1] if idx < len(pages) - 1 else None,
            )
    return None


def load_summary(content_dir: str) -> list[NavGroup]:
    """Read and parse SUMMARY.md from the content directory."""
    summary_path = os.path.join(content_dir, 'SUMMARY.md')
    try:
        with open(summary_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SummaryNotFoundError(summary_path, str(e)) from e
    return parse_summary(content)
