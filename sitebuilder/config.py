"""Site configuration shared by every build step."""

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .errors import ConfigError


PACKAGE_TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


@dataclass(frozen=True)
class SiteConfig:
    """Immutable build settings, passed explicitly to each component."""
    content_dir: str = 'docs'
    output_dir: str = 'dist'
    template_dir: str = 'templates'
    assets_dir: str = 'assets'
    site_name: str = 'Documentation'
    site_url: str = ''
    description: str = ''
    favicon: str = '/assets/favicon.svg'
    logo: str = '/assets/logo.svg'
    home_title: str = ''  # Page title rendered as just the site name

    def with_overrides(self, **overrides) -> 'SiteConfig':
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @property
    def template_path(self) -> str:
        """page.html from the template dir, falling back to the bundled one."""
        custom = os.path.join(self.template_dir, 'page.html')
        if os.path.isfile(custom):
            return custom
        return os.path.join(PACKAGE_TEMPLATE_DIR, 'page.html')


def load_config(path: Optional[str] = None) -> SiteConfig:
    """Load a site.json file on top of the defaults.

    Relative directories in the file are resolved against the file's location.
    """
    if not path:
        return SiteConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    known = {f.name for f in fields(SiteConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    base_dir = os.path.dirname(os.path.abspath(path))
    for key in ('content_dir', 'output_dir', 'template_dir', 'assets_dir'):
        if key in data and not os.path.isabs(data[key]):
            data[key] = os.path.join(base_dir, data[key])

    return SiteConfig(**data)
