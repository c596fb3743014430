"""Inline Markdown → HTML.

Each stage is a plain string transform applied in a fixed order. Earlier
stages emit markup that later stages must leave alone, so the order below
matters: code spans first, then images before links (an image is a link
with a leading `!`), then emphasis, then emoji.
"""

import re

from .utils import escape_html


# Shortcodes are replaced literally over the whole output, tags included
EMOJI_MAP = {
    ':warning:': '⚠️',
    ':info:': 'ℹ️',
    ':check:': '✅',
    ':x:': '❌',
}

GITBOOK_ASSETS_PREFIX = re.compile(r'^(?:\.\./)*\.gitbook/assets/')
EXTERNAL_HREF = re.compile(r'^https?://')

_CODE_SPAN = re.compile(r'`([^`]+)`')
_IMAGE = re.compile(r'!\[([^\]]*)\]\(([^)]+)\)')
_LINK = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
_BOLD_ITALIC = re.compile(r'\*\*\*([^*]+)\*\*\*')
_BOLD = re.compile(r'\*\*([^*]+)\*\*')
_ITALIC = re.compile(r'\*([^*]+)\*')
_STRIKE = re.compile(r'~~([^~]+)~~')
_PLACEHOLDER = re.compile(r'\x00CODE(\d+)\x00')


def format_inline(text: str) -> str:
    """Convert one fragment of Markdown text to inline HTML.

    Unbalanced or unknown syntax is left as literal text; this never raises.
    """
    # NUL delimits code-span placeholders and can never come from the source text
    return _format_fragment(text.replace('\x00', ''))


def _format_fragment(text: str) -> str:
    protected = []
    result = _protect_code_spans(text, protected)
    result = _convert_images(result)
    result = _convert_links(result)
    result = _convert_emphasis(result)
    result = _restore_code_spans(result, protected)
    return _replace_emoji(result)


def rewrite_asset_src(src: str) -> str:
    """Point GitBook's relative `.gitbook/assets/` paths at the site's image dir."""
    return GITBOOK_ASSETS_PREFIX.sub('/assets/images/', src)


def rewrite_href(href: str) -> str:
    """Map a link to a Markdown source file onto the generated HTML page."""
    if href.endswith('.md'):
        href = href[:-3] + '.html'
    if href.endswith('/'):
        href += 'index.html'
    return href.replace('README.html', 'index.html')


def _protect_code_spans(text: str, protected: list) -> str:
    """Swap code spans for placeholders so later stages can't touch their contents."""
    def replace_code(match):
        protected.append(f'<code>{escape_html(match.group(1))}</code>')
        return f'\x00CODE{len(protected) - 1}\x00'

    return _CODE_SPAN.sub(replace_code, text)


def _restore_code_spans(text: str, protected: list) -> str:
    if not protected:
        return text

    def restore(match):
        index = int(match.group(1))
        return protected[index] if index < len(protected) else match.group(0)

    return _PLACEHOLDER.sub(restore, text)


def _convert_images(text: str) -> str:
    def replace_image(match):
        alt = match.group(1)
        src = rewrite_asset_src(match.group(2).strip())
        return f'<img src="{src}" alt="{escape_html(alt)}" loading="lazy">'

    return _IMAGE.sub(replace_image, text)


def _convert_links(text: str) -> str:
    def replace_link(match):
        link_text = match.group(1)
        href = rewrite_href(match.group(2).strip())
        target = ''
        if EXTERNAL_HREF.match(href):
            target = ' target="_blank" rel="noopener noreferrer"'
        return f'<a href="{href}"{target}>{_format_fragment(link_text)}</a>'

    return _LINK.sub(replace_link, text)


def _convert_emphasis(text: str) -> str:
    text = _BOLD_ITALIC.sub(r'<strong><em>\1</em></strong>', text)
    text = _BOLD.sub(r'<strong>\1</strong>', text)
    text = _ITALIC.sub(r'<em>\1</em>', text)
    return _STRIKE.sub(r'<del>\1</del>', text)


def _replace_emoji(text: str) -> str:
    for code, emoji in EMOJI_MAP.items():
        text = text.replace(code, emoji)
    return text
