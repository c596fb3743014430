"""Strip front-matter and rewrite GitBook-only markup before block parsing.

GitBook exports a few constructs the block parser doesn't understand:
`{% content-ref %}` cards (dropped, the sidebar already links the pages)
and `<figure>` HTML blocks (rewritten to a themed figure).
"""

import re

from bs4 import BeautifulSoup

from .inline import rewrite_asset_src
from .models import Preprocessed
from .utils import escape_html


FRONTMATTER_BLOCK = re.compile(r'^---\n(.*?)\n---\n', re.DOTALL)
FRONTMATTER_LINE = re.compile(r'^([A-Za-z_][A-Za-z0-9_-]*)\s*:\s*(.+)$')
CONTENT_REF = re.compile(
    r'\{%\s*content-ref\s+url="[^"]*"\s*%\}.*?\{%\s*endcontent-ref\s*%\}',
    re.DOTALL,
)
FIGURE = re.compile(r'<figure>.*?</figure>', re.DOTALL)


def preprocess(raw: str) -> Preprocessed:
    """Split off front-matter and rewrite GitBook extensions in the body."""
    raw = raw.replace('\r\n', '\n')
    frontmatter, content = split_frontmatter(raw)
    content = strip_content_refs(content)
    content = rewrite_figures(content)
    return Preprocessed(content=content, frontmatter=frontmatter)


def split_frontmatter(content: str) -> tuple[dict, str]:
    """Split a leading `---` metadata block from the body.

    Only `key: value` lines count; the value is everything after the first
    colon, so URLs and times survive intact. Other lines are ignored.
    """
    match = FRONTMATTER_BLOCK.match(content)
    if not match:
        return {}, content

    fm = {}
    for line in match.group(1).split('\n'):
        line_match = FRONTMATTER_LINE.match(line)
        if line_match:
            fm[line_match.group(1)] = line_match.group(2).strip()

    return fm, content[match.end():]


def strip_content_refs(content: str) -> str:
    """Remove {% content-ref %} ... {% endcontent-ref %} blocks."""
    return CONTENT_REF.sub('', content)


def rewrite_figures(content: str) -> str:
    """Rewrite GitBook <figure> blocks; figures without an image are dropped."""
    return FIGURE.sub(lambda m: _convert_figure(m.group(0)), content)


def _convert_figure(figure_html: str) -> str:
    soup = BeautifulSoup(figure_html, 'html.parser')
    img = soup.find('img')
    if img is None or not img.get('src'):
        return ''

    src = escape_html(rewrite_asset_src(img['src']))
    alt = escape_html(img.get('alt', ''))
    return (
        f'<figure class="doc-figure"><img src="{src}" alt="{alt}" loading="lazy">'
        f'<figcaption>{alt}</figcaption></figure>'
    )
