import xml.etree.ElementTree as ET

from sitebuilder.site import SITEMAP_NS, build_robots, build_sitemap, copy_tree
from sitebuilder.summary_parser import make_page_ref


def test_build_sitemap():
    pages = [make_page_ref('Home', 'README.md'), make_page_ref('Guide', 'guide.md')]
    xml = build_sitemap(pages, 'https://docs.example.com/')

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    root = ET.fromstring(xml.split('\n', 1)[1])
    ns = {'s': SITEMAP_NS}
    urls = root.findall('s:url', ns)
    assert [u.find('s:loc', ns).text for u in urls] == [
        'https://docs.example.com/index.html',
        'https://docs.example.com/guide.html',
    ]
    assert [u.find('s:priority', ns).text for u in urls] == ['1.0', '0.7']
    assert urls[0].find('s:changefreq', ns).text == 'weekly'


def test_build_robots():
    assert build_robots('https://docs.example.com') == (
        'User-agent: *\nAllow: /\nSitemap: https://docs.example.com/sitemap.xml\n'
    )


def test_copy_tree(tmp_path):
    src = tmp_path / 'src'
    (src / 'img').mkdir(parents=True)
    (src / 'style.css').write_text('body {}')
    (src / 'img' / 'a.png').write_bytes(b'\x89PNG')
    dest = tmp_path / 'dest'

    assert copy_tree(str(src), str(dest)) == 2
    assert (dest / 'style.css').read_text() == 'body {}'
    assert (dest / 'img' / 'a.png').read_bytes() == b'\x89PNG'


def test_copy_tree_missing_source(tmp_path):
    assert copy_tree(str(tmp_path / 'nope'), str(tmp_path / 'dest')) == 0
    assert not (tmp_path / 'dest').exists()
