"""Build the whole site: pages, search index, sitemap and assets."""

import os
import time
from dataclasses import dataclass, field

from .config import SiteConfig
from .errors import SourceReadError
from .markdown_parser import parse_markdown
from .render import render_page
from .search_index import build_search_index, write_search_index
from .site import build_robots, build_sitemap, copy_tree
from .summary_parser import flatten_nav, load_summary
from .utils import ensure_dir


@dataclass
class BuildReport:
    """What a build produced."""
    pages_found: int = 0
    pages_built: list = field(default_factory=list)  # html paths
    missing: list = field(default_factory=list)  # md paths listed in SUMMARY.md but absent
    search_entries: int = 0
    assets_copied: int = 0
    elapsed_ms: int = 0


class SiteBuilder:
    """Runs one synchronous build per call to build()."""

    def __init__(self, config: SiteConfig, quiet: bool = False):
        self.config = config
        self.quiet = quiet

    def _log(self, message: str = ''):
        if not self.quiet:
            print(message)

    def build(self) -> BuildReport:
        """Build the site into config.output_dir.

        Raises SummaryNotFoundError if SUMMARY.md can't be read. Pages listed
        in the summary but missing on disk are reported and skipped.
        """
        config = self.config
        report = BuildReport()
        start = time.monotonic()

        self._log()
        self._log(f"  Building {config.site_name}...")

        nav = load_summary(config.content_dir)
        pages = flatten_nav(nav)
        report.pages_found = len(pages)
        self._log(f"  ✓ {len(pages)} pages found in SUMMARY.md")

        os.makedirs(config.output_dir, exist_ok=True)
        template = _read_source(config.template_path)

        # Missing pages stay in the sidebar but drop out of prev/next and the sitemap
        available = []
        for page in pages:
            if os.path.isfile(os.path.join(config.content_dir, page.md_path)):
                available.append(page)
            else:
                self._log(f"  ⚠ Missing: {page.md_path}")
                report.missing.append(page.md_path)

        parsed = {}
        for page in available:
            result = parse_markdown(_read_source(os.path.join(config.content_dir, page.md_path)))
            parsed[page.md_path] = result

            output = render_page(template, page, nav, available, result, config)
            output_file = os.path.join(config.output_dir, page.html_path)
            ensure_dir(output_file)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(output)
            report.pages_built.append(page.html_path)

        self._log(f"  ✓ {len(report.pages_built)} pages built")

        records = build_search_index(available, config.content_dir, cache=parsed)
        write_search_index(records, config.output_dir)
        report.search_entries = len(records)
        self._log(f"  ✓ Search index: {len(records)} entries")

        if config.site_url:
            with open(os.path.join(config.output_dir, 'sitemap.xml'), 'w', encoding='utf-8') as f:
                f.write(build_sitemap(available, config.site_url))
            with open(os.path.join(config.output_dir, 'robots.txt'), 'w', encoding='utf-8') as f:
                f.write(build_robots(config.site_url))
            self._log(f"  ✓ Sitemap: {len(available)} URLs, robots.txt generated")
        else:
            self._log("  ⚠ No site_url configured, skipping sitemap.xml and robots.txt")

        assets_out = os.path.join(config.output_dir, 'assets')
        report.assets_copied += copy_tree(config.assets_dir, assets_out)
        gitbook_assets = os.path.join(config.content_dir, '.gitbook', 'assets')
        images_copied = copy_tree(gitbook_assets, os.path.join(assets_out, 'images'))
        report.assets_copied += images_copied
        if images_copied:
            self._log(f"  ✓ Copied {images_copied} images from .gitbook/assets/")

        report.elapsed_ms = int((time.monotonic() - start) * 1000)
        self._log()
        self._log(f"  Done in {report.elapsed_ms}ms → {os.path.abspath(config.output_dir)}")
        self._log()
        return report


def _read_source(path: str) -> str:
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(path, e.strerror or str(e)) from e
