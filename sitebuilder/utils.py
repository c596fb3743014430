"""Shared helpers for the docs site builder."""

import os
import re


def escape_html(text: str) -> str:
    """Escape the characters that matter inside element content and attributes."""
    return (
        text.replace('&', '&amp;')
        .replace('<', '&lt;')
        .replace('>', '&gt;')
        .replace('"', '&quot;')
    )


def slugify(text: str) -> str:
    """Create an anchor id from heading text.

    Tags are stripped before punctuation so markup inside a heading never
    leaks into the id. Running the result through slugify again is a no-op.
    """
    text = text.lower()
    text = re.sub(r'<[^>]*>', '', text)
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-')


def ensure_dir(path: str):
    """Create the parent directory of a file path if it doesn't exist."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
