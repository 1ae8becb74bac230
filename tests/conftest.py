from pathlib import Path

import pytest

NAVIGATION_TS = """\
import type { NavSection } from './types';

export const navigation: NavSection[] = [
  {
    title: 'Getting Started',
    items: [
      { title: 'Installation', href: '/docs/getting-started' },
      { title: 'First Macro', href: '/docs/getting-started/first-macro' }
    ]
  },
  {
    title: 'API Reference',
    items: [
      { title: 'expandSync()', href: '/docs/api/expand-sync' },
      { title: 'Missing Page', href: '/docs/api/missing' }
    ]
  },
  {
    title: 'Community',
    items: [
      { title: 'GitHub', href: 'https://github.com/example', external: true }
    ]
  }
];
"""

INSTALLATION_SVX = """\
<!-- This page is generated from the website sources -->
<svelte:head>
  <title>Installation - Macroforge</title>
</svelte:head>

# Installation

Install the package with `npm install macroforge`.


Then add the plugin to your build.
"""

INSTALLATION_HTML = """\
<html><body><div class="prose"><h1>Installation</h1><p>RENDERED COPY</p></div></body></html>
"""

FIRST_MACRO_HTML = """\
<!DOCTYPE html>
<html>
<head><title>First Macro</title><script>window.__data = {};</script></head>
<body>
<nav><a href="/">Home</a><a href="/docs">Docs</a></nav>
<main>
<div class="prose">
<!--[-->
<h1>Your First Macro</h1>
<p>Add a <code>@derive(Debug)</code> decorator to a class &amp; run the build.</p>
<button>Copy</button>
</div>
</main>
</body>
</html>
"""


def filler(sentence: str, length: int) -> str:
    """Repeat ``sentence`` until the text is at least ``length`` characters long."""
    text = sentence
    while len(text) < length:
        text += " " + sentence
    return text


def expand_sync_source() -> str:
    return (
        "# expandSync()\n\n"
        "Expands macros synchronously.\n\n"
        "## Signature\n\n"
        + filler("The function takes source code and returns the expanded result.", 2000)
        + "\n\n## Options\n\n"
        + "Pass `keepDecorators` or `filename` to tune the output. "
        + filler("Options are optional and have sensible defaults.", 2500)
        + "\n\n## Using `expandSync`\n\n"
        + filler("Call it from build scripts or tests.", 2000)
        + "\n"
    )


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A miniature project checkout with navigation, mdsvex sources and prerendered pages."""
    root = tmp_path / "repo"
    write(root / "pixi.toml", "[project]\nname = 'macroforge'\n")

    website = root / "website"
    write(website / "src" / "lib" / "config" / "navigation.ts", NAVIGATION_TS)

    routes = website / "src" / "routes"
    write(routes / "docs" / "getting-started" / "+page.svx", INSTALLATION_SVX)
    write(routes / "docs" / "api" / "expand-sync" / "+page.svx", expand_sync_source())

    prerendered = website / "build" / "prerendered"
    write(prerendered / "docs" / "getting-started.html", INSTALLATION_HTML)
    write(prerendered / "docs" / "getting-started" / "first-macro.html", FIRST_MACRO_HTML)

    return root
