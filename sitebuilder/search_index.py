"""Build the client-side search index from the navigation's pages."""

import json
import os
from typing import Optional

from .markdown_parser import parse_markdown
from .models import PageRef, SearchRecord
from .utils import ensure_dir


# Keep the index compact; the client only needs enough text to match on
MAX_TEXT_LENGTH = 500


def build_search_index(pages: list[PageRef], content_dir: str,
                       cache: Optional[dict] = None) -> list[SearchRecord]:
    """Parse each page and project it into a search record.

    Pages whose source file doesn't exist are skipped. `cache` maps
    md_path → ParseResult and lets a build reuse the pages it has already
    parsed for rendering.
    """
    index = []
    for page in pages:
        md_file = os.path.join(content_dir, page.md_path)
        if not os.path.isfile(md_file):
            continue

        result = cache.get(page.md_path) if cache else None
        if result is None:
            with open(md_file, 'r', encoding='utf-8', errors='replace') as f:
                result = parse_markdown(f.read())

        index.append(SearchRecord(
            title=page.title,
            path=page.path,
            text=result.plain_text[:MAX_TEXT_LENGTH],
            headings=' '.join(h.text for h in result.headings),
        ))
    return index


def write_search_index(records: list[SearchRecord], output_dir: str) -> str:
    """Write assets/search-index.json and return its path."""
    index_path = os.path.join(output_dir, 'assets', 'search-index.json')
    ensure_dir(index_path)
    with open(index_path, 'w', encoding='utf-8') as f:
        json.dump([r.to_dict() for r in records], f, ensure_ascii=False, separators=(',', ':'))
    return index_path
