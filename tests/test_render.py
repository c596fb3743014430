from sitebuilder.config import SiteConfig
from sitebuilder.markdown_parser import parse_markdown
from sitebuilder.models import Heading, NavGroup
from sitebuilder.render import (
    build_prev_next_html,
    build_sidebar_html,
    build_toc_html,
    inject_hero_banner,
    render_page,
    render_template,
)
from sitebuilder.summary_parser import flatten_nav, make_page_ref


HOME = make_page_ref('Home', 'README.md')
SETUP = make_page_ref('Setup', 'guide/setup.md')
USAGE = make_page_ref('Usage', 'guide/usage.md')
NAV = [NavGroup(title='', items=[HOME]), NavGroup(title='Guide', items=[SETUP, USAGE])]
PAGES = flatten_nav(NAV)


def test_render_template():
    template = '<title>{{title}}</title>{{missing}}{{empty}}{{title}}'
    assert render_template(template, {'title': 'T', 'empty': None}) == '<title>T</title>{{missing}}T'


def test_render_template_leaves_placeholders_inside_values():
    template = '<main>{{content}}</main><nav>{{toc}}</nav>'
    variables = {'content': '<code>{{toc}}</code>', 'toc': 'TOC'}
    assert render_template(template, variables) == '<main><code>{{toc}}</code></main><nav>TOC</nav>'


def test_sidebar_marks_active_page():
    html = build_sidebar_html(NAV, SETUP.path)
    assert html == (
        '<ul class="nav-list">\n'
        '<li><a href="/index.html">Home</a></li>\n'
        '</ul>\n'
        '<div class="nav-group-title">Guide</div>\n'
        '<ul class="nav-list">\n'
        '<li class="active"><a href="/guide/setup.html">Setup</a></li>\n'
        '<li><a href="/guide/usage.html">Usage</a></li>\n'
        '</ul>'
    )


def test_toc_lists_level_two_and_three():
    headings = [
        Heading(1, 'Title', 'title'),
        Heading(2, 'Install', 'install'),
        Heading(3, 'Linux', 'linux'),
        Heading(4, 'Deep', 'deep'),
    ]
    html = build_toc_html(headings)
    assert '<li><a href="#install">Install</a></li>' in html
    assert '<li class="toc-sub"><a href="#linux">Linux</a></li>' in html
    assert 'deep' not in html
    assert 'On this page' in html


def test_toc_empty_cases():
    assert build_toc_html([]) == ''
    assert build_toc_html([Heading(2, 'Only', 'only')]) == ''
    assert build_toc_html([Heading(1, 'A', 'a'), Heading(4, 'B', 'b')]) == ''


def test_prev_next_html():
    html = build_prev_next_html(PAGES, SETUP.path)
    assert 'href="/index.html" class="prev-next-link prev"' in html
    assert 'href="/guide/usage.html" class="prev-next-link next"' in html

    first = build_prev_next_html(PAGES, HOME.path)
    assert first.startswith('<div class="prev-next">\n<div></div>')
    assert build_prev_next_html(PAGES, '/nope.html') == ''


def test_render_page_title_and_description():
    config = SiteConfig(site_name='Acme Docs', description='Default description', home_title='Home')
    template = '{{title}}|{{description}}|{{content}}|{{currentPath}}'

    home = render_page(template, HOME, NAV, PAGES, parse_markdown('# Home'), config)
    assert home.startswith('Acme Docs|Default description|')

    setup = render_page(template, SETUP, NAV, PAGES,
                        parse_markdown('---\ndescription: Set it up\n---\n# Setup'), config)
    assert setup.startswith('Setup | Acme Docs|Set it up|<h1 id="setup">')
    assert setup.endswith('|/guide/setup.html')


def test_landing_page_gets_hero_banner():
    config = SiteConfig(site_name='Acme', description='Fast & small')
    markdown = (
        '---\nlayout: landing\n---\n# Welcome\n'
        '<figure><img src=".gitbook/assets/cover.png" alt="Cover"></figure>\n'
        'Intro'
    )
    html = render_page('{{content}}', HOME, NAV, PAGES, parse_markdown(markdown), config)
    assert html.startswith('<div class="hero-banner">')
    assert '<div class="hero-banner-subtitle">Fast &amp; small</div>' in html
    assert 'doc-figure' not in html
    assert html.index('hero-banner') < html.index('<h1')


def test_inject_hero_banner_without_heading():
    html = inject_hero_banner('<p>No heading</p>', SiteConfig())
    assert html == '<p>No heading</p>'
