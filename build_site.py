#!/usr/bin/env python3
"""
GitBook Docs Static Site Builder

Builds a static HTML documentation site from a GitBook-style Markdown
directory: SUMMARY.md defines the navigation, every listed page is
rendered with a sidebar, table of contents and prev/next links, and a
search index is written for the client-side search box.

  One-shot build: python build_site.py ./docs --output ./dist
  Watch mode:     python build_site.py ./docs --output ./dist --watch
"""

import argparse
import sys

from sitebuilder.builder import SiteBuilder
from sitebuilder.config import load_config
from sitebuilder.errors import SiteBuildError
from sitebuilder.watcher import watch


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Build a static docs site from a GitBook Markdown directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python build_site.py ./docs --output ./dist
  python build_site.py --config site.json --watch
        """,
    )
    parser.add_argument(
        'content_dir',
        nargs='?',
        default=None,
        help='Directory containing SUMMARY.md and the Markdown pages (default: ./docs)',
    )
    parser.add_argument('--output', '-o', default=None, help='Output directory (default: ./dist)')
    parser.add_argument('--templates', default=None, help='Directory containing page.html')
    parser.add_argument('--assets', default=None, help='Static assets copied to <output>/assets')
    parser.add_argument('--config', '-c', default=None, help='JSON site config (site.json)')
    parser.add_argument('--site-name', default=None, help='Site name shown in titles and the header')
    parser.add_argument('--site-url', default=None, help='Public base URL, used for sitemap.xml')
    parser.add_argument(
        '--watch',
        action='store_true',
        help='Rebuild whenever content, templates or assets change',
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            content_dir=args.content_dir,
            output_dir=args.output,
            template_dir=args.templates,
            assets_dir=args.assets,
            site_name=args.site_name,
            site_url=args.site_url,
        )
        builder = SiteBuilder(config)
        builder.build()
    except SiteBuildError as e:
        print(f"  ✗ {e}")
        return 1

    if args.watch:
        watch(builder, [config.content_dir, config.template_dir, config.assets_dir])
    return 0


if __name__ == '__main__':
    sys.exit(main())
