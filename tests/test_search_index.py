import json

from sitebuilder.models import Heading, ParseResult
from sitebuilder.search_index import build_search_index, write_search_index
from sitebuilder.summary_parser import make_page_ref


def test_build_search_index(tmp_path):
    (tmp_path / 'README.md').write_text('# Welcome\n\nHello **there**.\n\n## Next steps\n', encoding='utf-8')
    (tmp_path / 'long.md').write_text('word ' * 300, encoding='utf-8')
    pages = [
        make_page_ref('Welcome', 'README.md'),
        make_page_ref('Missing', 'missing.md'),
        make_page_ref('Long', 'long.md'),
    ]

    records = build_search_index(pages, str(tmp_path))

    assert [r.path for r in records] == ['/index.html', '/long.html']
    welcome = records[0]
    assert welcome.title == 'Welcome'
    assert welcome.text == 'Welcome Hello **there**. Next steps'
    assert welcome.headings == 'Welcome Next steps'
    assert len(records[1].text) == 500


def test_build_search_index_uses_cache(tmp_path):
    (tmp_path / 'a.md').write_text('# From disk\n', encoding='utf-8')
    cached = ParseResult(
        html='',
        headings=[Heading(level=1, text='Cached', id='cached')],
        plain_text='cached text',
    )

    records = build_search_index([make_page_ref('A', 'a.md')], str(tmp_path), cache={'a.md': cached})

    assert records[0].text == 'cached text'
    assert records[0].headings == 'Cached'


def test_write_search_index(tmp_path):
    (tmp_path / 'a.md').write_text('# Título\n\nTexto', encoding='utf-8')
    records = build_search_index([make_page_ref('A', 'a.md')], str(tmp_path))

    index_path = write_search_index(records, str(tmp_path / 'out'))

    with open(index_path, encoding='utf-8') as f:
        data = json.load(f)
    assert data == [{'title': 'A', 'path': '/a.html', 'text': 'Título Texto', 'headings': 'Título'}]
