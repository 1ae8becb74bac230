"""Discover documentation pages from the website's navigation config."""

import re
from dataclasses import dataclass, field

from docs_extract.errors import NavigationError

SECTION_RE = re.compile(
    r"""\{\s*title:\s*['"]([^'"]+)['"]\s*,\s*items:\s*\[([\s\S]*?)\]\s*,?\s*\}"""
)
ITEM_RE = re.compile(
    r"""\{\s*title:\s*['"]([^'"]+)['"]\s*,\s*href:\s*['"]([^'"]+)['"]\s*,?\s*\}"""
)


@dataclass
class NavItem:
    """A single documentation page referenced from the navigation."""

    title: str
    href: str


@dataclass
class NavSection:
    """A titled group of navigation items."""

    title: str
    items: list[NavItem] = field(default_factory=list)


def parse_navigation(text: str) -> list[NavSection]:
    """Extract navigation sections from the source of ``navigation.ts``.

    This is pattern extraction, not a TypeScript parser: only blocks shaped
    like ``{ title: '...', items: [...] }`` and ``{ title: '...', href: '...' }``
    are recognised. Anything else (external links, items with extra fields)
    is ignored, and sections left without items are dropped.
    """
    sections = []

    for section_match in SECTION_RE.finditer(text):
        items = [
            NavItem(title=item_match.group(1), href=item_match.group(2))
            for item_match in ITEM_RE.finditer(section_match.group(2))
        ]
        if items:
            sections.append(NavSection(title=section_match.group(1), items=items))

    return sections


def load_navigation(path: str) -> list[NavSection]:
    """Read and parse the navigation config at ``path``."""
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise NavigationError(f"Failed to read navigation config {path}: {e}") from e

    return parse_navigation(text)
