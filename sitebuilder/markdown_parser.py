"""Convert GitBook-flavored Markdown to HTML.

A single forward scan over the lines of a page. At most one block is open
at a time (code fence, hint, table, list or blockquote); opening a block
flushes the others, and anything unrecognized becomes a paragraph. The
parser collects headings and a plain-text projection for search as it goes.
"""

import enum
import re

from .inline import format_inline
from .models import Heading, ParseResult
from .preprocess import preprocess
from .utils import escape_html, slugify


# GitBook hint styles → icon shown in the callout
HINT_ICONS = {
    'info': 'ℹ️',
    'warning': '⚠️',
    'success': '✅',
    'danger': '🚨',
    'tip': '💡',
}
DEFAULT_HINT_ICON = 'ℹ️'

COPY_BUTTON = (
    '<button class="copy-btn" onclick="navigator.clipboard.writeText('
    'this.closest(\'.code-block\').querySelector(\'code\').textContent)">'
    '<svg width="14" height="14" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
    '<rect x="9" y="9" width="13" height="13" rx="2" ry="2"/>'
    '<path d="M5 15H4a2 2 0 01-2-2V4a2 2 0 012-2h9a2 2 0 012 2v1"/></svg></button>'
)

FENCE = '```'
HINT_START = re.compile(r'\{%\s*hint\s+style="(\w+)"\s*%\}')
HINT_END = re.compile(r'\{%\s*endhint\s*%\}')
HTML_TABLE_SCAFFOLD = re.compile(r'<table\b[^>]*>|</table>|</?thead>|</?tbody>|</?tr>')
HTML_TABLE_CELL = re.compile(r'<t[dh]>')
HTML_TABLE_CELL_TAG = re.compile(r'</?t[dh]>')
HEADING = re.compile(r'^(#{1,6})\s+(.+)$')
HORIZONTAL_RULE = re.compile(r'^(\*{3,}|-{3,}|_{3,})$')
UNORDERED_ITEM = re.compile(r'^\s*[-*]\s+(.+)$')
ORDERED_ITEM = re.compile(r'^\s*\d+\.\s+(.+)$')
LIST_ITEM_START = re.compile(r'^(\s*[-*]|\s*\d+\.)\s')
SEPARATOR_CELL = re.compile(r'^[-:\s]+$')


class Mode(enum.Enum):
    NONE = 'none'
    CODE = 'code'
    HINT = 'hint'
    TABLE = 'table'
    LIST = 'list'
    BLOCKQUOTE = 'blockquote'


def parse_markdown(markdown: str) -> ParseResult:
    """Parse a whole page: front-matter, GitBook extensions and blocks."""
    pre = preprocess(markdown)
    return BlockParser().parse(pre.content, pre.frontmatter)


class BlockParser:
    """Line-oriented block parser. One instance parses one document."""

    def __init__(self):
        self.html_parts = []
        self.headings = []
        self.plain_text_parts = []

        self.mode = Mode.NONE
        # Block to return to when a code fence closes (fences may sit inside hints)
        self._resume_mode = Mode.NONE

        self.code_lang = ''
        self.code_lines = []
        self.hint_style = ''
        self.hint_lines = []
        self.table_rows = []
        self.list_type = 'ul'
        self.list_items = []
        self.quote_lines = []

    def parse(self, content: str, frontmatter: dict = None) -> ParseResult:
        lines = content.split('\n')
        i = 0
        while i < len(lines):
            self._parse_line(lines[i], lines[i + 1] if i + 1 < len(lines) else None)
            i += 1

        # An unterminated fence is dropped; every other open block is rendered
        if self.mode == Mode.CODE:
            self.mode = self._resume_mode
        self._flush_list()
        self._flush_table()
        self._flush_blockquote()
        self._flush_hint()

        plain_text = re.sub(r'\s+', ' ', ' '.join(self.plain_text_parts)).strip()
        return ParseResult(
            html='\n'.join(self.html_parts),
            headings=self.headings,
            frontmatter=dict(frontmatter or {}),
            plain_text=plain_text,
        )

    def _parse_line(self, line: str, next_line):
        stripped = line.strip()

        if line.startswith(FENCE):
            if self.mode == Mode.CODE:
                self._close_code_block()
            else:
                self._open_code_block(line[len(FENCE):].strip())
            return

        if self.mode == Mode.CODE:
            self.code_lines.append(line)
            return

        hint_match = HINT_START.search(line)
        if hint_match:
            self._flush_open_blocks()
            self._flush_hint()
            self.mode = Mode.HINT
            self.hint_style = hint_match.group(1)
            self.hint_lines = []
            return
        if HINT_END.search(line):
            self._flush_hint()
            return
        if self.mode == Mode.HINT:
            self.hint_lines.append(line)
            return

        # GitBook exports card tables as raw HTML; keep only the cell text
        if HTML_TABLE_SCAFFOLD.search(line):
            return
        if HTML_TABLE_CELL.search(line):
            cell = HTML_TABLE_CELL_TAG.sub('', line).strip()
            if cell:
                self._flush_open_blocks()
                self.html_parts.append(f'<p>{format_inline(cell)}</p>')
            return

        if stripped.startswith('|') and stripped.endswith('|'):
            self._flush_list()
            self._flush_blockquote()
            if self.mode != Mode.TABLE:
                self.mode = Mode.TABLE
                self.table_rows = []
            self.table_rows.append(stripped[1:-1].split('|'))
            return
        self._flush_table()

        heading_match = HEADING.match(line)
        if heading_match:
            self._flush_open_blocks()
            self._add_heading(len(heading_match.group(1)), heading_match.group(2))
            return

        if HORIZONTAL_RULE.match(stripped):
            self._flush_open_blocks()
            self.html_parts.append('<hr>')
            return

        if line.startswith('>'):
            self._flush_list()
            self._flush_table()
            self.mode = Mode.BLOCKQUOTE
            self.quote_lines.append(line[1:].strip())
            return
        self._flush_blockquote()

        item_match = UNORDERED_ITEM.match(line)
        if item_match:
            self._add_list_item('ul', item_match.group(1))
            return
        item_match = ORDERED_ITEM.match(line)
        if item_match:
            self._add_list_item('ol', item_match.group(1))
            return

        if not stripped:
            # A blank line between two items keeps the list open
            if self.mode == Mode.LIST and next_line is not None and LIST_ITEM_START.match(next_line):
                return
            self._flush_list()
            return

        self._flush_list()
        self.html_parts.append(f'<p>{format_inline(line)}</p>')
        self.plain_text_parts.append(line)

    # ---- Block openers ----

    def _open_code_block(self, lang: str):
        self._flush_open_blocks()
        self._resume_mode = Mode.HINT if self.mode == Mode.HINT else Mode.NONE
        self.mode = Mode.CODE
        self.code_lang = lang
        self.code_lines = []

    def _close_code_block(self):
        code = '\n'.join(self.code_lines)
        lang = self.code_lang or 'text'
        self.html_parts.append(
            '<div class="code-block"><div class="code-header">'
            f'<span class="code-lang">{escape_html(lang)}</span>{COPY_BUTTON}</div>'
            f'<pre><code class="language-{escape_html(lang)}">{escape_html(code)}</code></pre></div>'
        )
        self.plain_text_parts.append(code)
        self.code_lines = []
        self.mode = self._resume_mode
        self._resume_mode = Mode.NONE

    def _add_heading(self, level: int, text: str):
        clean_text = text.replace('**', '')
        heading_id = slugify(clean_text)
        self.headings.append(Heading(level=level, text=clean_text, id=heading_id))
        self.plain_text_parts.append(clean_text)
        self.html_parts.append(
            f'<h{level} id="{heading_id}"><a href="#{heading_id}" class="heading-anchor">#</a>'
            f'{format_inline(text)}</h{level}>'
        )

    def _add_list_item(self, list_type: str, text: str):
        self._flush_table()
        self._flush_blockquote()
        if self.mode != Mode.LIST or self.list_type != list_type:
            self._flush_list()
            self.mode = Mode.LIST
            self.list_type = list_type
            self.list_items = []
        self.list_items.append(text)

    # ---- Flushers ----

    def _flush_open_blocks(self):
        """Close whichever of list, table or blockquote is open."""
        self._flush_list()
        self._flush_table()
        self._flush_blockquote()

    def _flush_list(self):
        if self.mode != Mode.LIST:
            return
        self.html_parts.append(f'<{self.list_type} class="doc-list">')
        for item in self.list_items:
            self.html_parts.append(f'<li>{format_inline(item)}</li>')
            self.plain_text_parts.append(item)
        self.html_parts.append(f'</{self.list_type}>')
        self.mode = Mode.NONE
        self.list_items = []

    def _flush_table(self):
        if self.mode != Mode.TABLE:
            return
        self.mode = Mode.NONE
        rows, self.table_rows = self.table_rows, []
        if not rows:
            return

        parts = ['<div class="table-wrapper"><table>', '<thead><tr>']
        for cell in rows[0]:
            parts.append(f'<th>{format_inline(cell.strip())}</th>')
        parts.append('</tr></thead>')

        parts.append('<tbody>')
        for row in rows[1:]:
            # GFM alignment row (---|:--:)
            if all(SEPARATOR_CELL.match(cell) for cell in row):
                continue
            parts.append('<tr>')
            for cell in row:
                parts.append(f'<td>{format_inline(cell.strip())}</td>')
                self.plain_text_parts.append(cell.strip())
            parts.append('</tr>')
        parts.append('</tbody></table></div>')
        self.html_parts.extend(parts)

    def _flush_blockquote(self):
        if self.mode != Mode.BLOCKQUOTE:
            return
        quoted = '<br>'.join(format_inline(line) for line in self.quote_lines)
        self.html_parts.append(f'<blockquote>{quoted}</blockquote>')
        self.mode = Mode.NONE
        self.quote_lines = []

    def _flush_hint(self):
        if self.mode != Mode.HINT:
            return
        icon = HINT_ICONS.get(self.hint_style, DEFAULT_HINT_ICON)
        self.html_parts.append(
            f'<div class="hint hint-{self.hint_style}"><span class="hint-icon">{icon}</span>'
            f'<div class="hint-content">{render_paragraphs(self.hint_lines)}</div></div>'
        )
        self.mode = Mode.NONE
        self.hint_lines = []


def render_paragraphs(lines: list) -> str:
    """Render each non-blank line as its own paragraph (hint bodies)."""
    return '\n'.join(
        f'<p>{format_inline(line)}</p>' for line in lines if line.strip()
    )
