"""Site-level outputs: sitemap.xml, robots.txt and copied assets."""

import os
import shutil
import xml.etree.ElementTree as ET

from .models import PageRef


SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'


def build_sitemap(pages: list[PageRef], site_url: str) -> str:
    """Build sitemap.xml; the home page gets the top priority."""
    site_url = site_url.rstrip('/')
    urlset = ET.Element('urlset', xmlns=SITEMAP_NS)
    for page in pages:
        url = ET.SubElement(urlset, 'url')
        ET.SubElement(url, 'loc').text = site_url + page.path
        ET.SubElement(url, 'changefreq').text = 'weekly'
        ET.SubElement(url, 'priority').text = '1.0' if page.path == '/index.html' else '0.7'

    ET.indent(urlset, space='  ')
    body = ET.tostring(urlset, encoding='unicode')
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + '\n'


def build_robots(site_url: str) -> str:
    return f"User-agent: *\nAllow: /\nSitemap: {site_url.rstrip('/')}/sitemap.xml\n"


def copy_tree(src: str, dest: str) -> int:
    """Copy every file under src into dest, overwriting. Returns the file count."""
    if not os.path.isdir(src):
        return 0

    copied = 0
    for root, _dirs, files in os.walk(src):
        target_dir = os.path.join(dest, os.path.relpath(root, src))
        os.makedirs(target_dir, exist_ok=True)
        for fname in sorted(files):
            shutil.copy2(os.path.join(root, fname), os.path.join(target_dir, fname))
            copied += 1
    return copied
