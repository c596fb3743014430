"""Assemble a parsed page into the HTML page template."""

import re

from .config import SiteConfig
from .models import Heading, NavGroup, PageRef, ParseResult
from .summary_parser import prev_next
from .utils import escape_html


TEMPLATE_VARIABLE = re.compile(r'\{\{(\w+)\}\}')


def render_template(template: str, variables: dict) -> str:
    """Replace each {{key}} with its value; None renders as an empty string.

    Substitution is a single pass, so placeholders inside substituted values
    (a page documenting {{toc}}, say) are left as written. Unknown keys stay
    in the output untouched.
    """
    def replace(match):
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        value = variables[key]
        return '' if value is None else str(value)

    return TEMPLATE_VARIABLE.sub(replace, template)


def build_sidebar_html(nav: list[NavGroup], current_path: str) -> str:
    parts = []
    for group in nav:
        if group.title:
            parts.append(f'<div class="nav-group-title">{group.title}</div>')
        parts.append('<ul class="nav-list">')
        for item in group.items:
            active = ' class="active"' if item.path == current_path else ''
            parts.append(f'<li{active}><a href="{item.path}">{item.title}</a></li>')
        parts.append('</ul>')
    return '\n'.join(parts)


def build_toc_html(headings: list[Heading]) -> str:
    """'On this page' list of the level 2 and 3 headings."""
    if len(headings) <= 1:
        return ''
    entries = [h for h in headings if 2 <= h.level <= 3]
    if not entries:
        return ''

    parts = ['<nav class="toc"><div class="toc-title">On this page</div><ul>']
    for h in entries:
        indent = ' class="toc-sub"' if h.level == 3 else ''
        parts.append(f'<li{indent}><a href="#{h.id}">{h.text}</a></li>')
    parts.append('</ul></nav>')
    return '\n'.join(parts)


def build_prev_next_html(pages: list[PageRef], current_path: str) -> str:
    neighbours = prev_next(pages, current_path)
    if neighbours is None:
        return ''

    parts = ['<div class="prev-next">']
    if neighbours.prev:
        parts.append(
            f'<a href="{neighbours.prev.path}" class="prev-next-link prev">'
            f'<span class="prev-next-label">← Previous</span>'
            f'<span class="prev-next-title">{neighbours.prev.title}</span></a>'
        )
    else:
        parts.append('<div></div>')
    if neighbours.next:
        parts.append(
            f'<a href="{neighbours.next.path}" class="prev-next-link next">'
            f'<span class="prev-next-label">Next →</span>'
            f'<span class="prev-next-title">{neighbours.next.title}</span></a>'
        )
    else:
        parts.append('<div></div>')
    parts.append('</div>')
    return '\n'.join(parts)


def inject_hero_banner(html: str, config: SiteConfig) -> str:
    """Landing pages: swap GitBook's cover figure for a hero banner above the h1."""
    banner = (
        '<div class="hero-banner"><div class="hero-banner-inner">'
        '<div class="hero-banner-tagline">Documentation</div>'
        f'<div class="hero-banner-title">{escape_html(config.site_name)}</div>'
        f'<div class="hero-banner-subtitle">{escape_html(config.description)}</div>'
        '</div></div>'
    )
    html = re.sub(r'<figure class="doc-figure">.*?</figure>', '', html, count=1, flags=re.DOTALL)
    return re.sub(
        r'(<h1[^>]*>.*?</h1>)',
        lambda m: banner + '\n' + m.group(1),
        html,
        count=1,
        flags=re.DOTALL,
    )


def render_page(template: str, page: PageRef, nav: list[NavGroup], pages: list[PageRef],
                result: ParseResult, config: SiteConfig) -> str:
    """Render one page of the site."""
    if config.home_title and page.title == config.home_title:
        page_title = config.site_name
    else:
        page_title = f'{page.title} | {config.site_name}'

    content_html = result.html
    if result.frontmatter.get('layout') == 'landing':
        content_html = inject_hero_banner(content_html, config)

    return render_template(template, {
        'title': page_title,
        'description': result.frontmatter.get('description') or config.description,
        'siteName': config.site_name,
        'favicon': config.favicon,
        'logo': config.logo,
        'siteUrl': config.site_url,
        'sidebar': build_sidebar_html(nav, page.path),
        'content': content_html,
        'toc': build_toc_html(result.headings),
        'prevNext': build_prev_next_html(pages, page.path),
        'pageTitle': page.title,
        'currentPath': page.path,
    })
