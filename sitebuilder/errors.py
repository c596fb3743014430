"""Exceptions raised by the site builder."""


class SiteBuildError(Exception):
    """Base class for errors that abort a build."""


class SummaryNotFoundError(SiteBuildError):
    """SUMMARY.md is missing or unreadable; no navigation can be built."""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        message = f"No readable SUMMARY.md at {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ConfigError(SiteBuildError):
    """The site configuration file could not be loaded."""


class SourceReadError(SiteBuildError):
    """A page template or page source exists but could not be read."""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        message = f"Cannot read {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
