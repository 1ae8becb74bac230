"""Lookup tables and href helpers for the documentation site."""

from types import MappingProxyType

DOCS_PREFIX = "/docs/"

USE_CASES = MappingProxyType(
    {
        # Getting Started
        "/docs/getting-started": "setup, install, npm, getting started, quick start, init",
        "/docs/getting-started/first-macro": "tutorial, example, hello world, beginner, learn",
        # Core Concepts
        "/docs/concepts": "architecture, overview, understanding, basics, fundamentals",
        "/docs/concepts/derive-system": "@derive, decorator, annotation, derive macro",
        "/docs/concepts/architecture": "internals, rust, swc, napi, how it works",
        # Built-in Macros
        "/docs/builtin-macros": "all macros, list, available macros, macro list",
        "/docs/builtin-macros/debug": "toString, debugging, logging, output, print",
        "/docs/builtin-macros/clone": "copy, clone, duplicate, shallow copy, immutable",
        "/docs/builtin-macros/default": "default values, factory, initialization, constructor",
        "/docs/builtin-macros/hash": "hashCode, hashing, hash map, equality, hash function",
        "/docs/builtin-macros/ord": "compareTo, ordering, sorting, comparison, total order",
        "/docs/builtin-macros/partial-eq": "equals, equality, comparison, value equality",
        "/docs/builtin-macros/partial-ord": "compareTo, partial ordering, sorting, nullable comparison",
        "/docs/builtin-macros/serialize": "toJSON, serialization, json, api, data transfer",
        "/docs/builtin-macros/deserialize": "fromJSON, deserialization, parsing, validation, json",
        # Custom Macros
        "/docs/custom-macros": "custom, extending, creating macros, own macro",
        "/docs/custom-macros/rust-setup": "rust, cargo, napi, compilation, building",
        "/docs/custom-macros/ts-macro-derive": "attribute, proc macro, derive attribute, rust macro",
        "/docs/custom-macros/ts-quote": "ts_quote, template, code generation, interpolation",
        # Integration
        "/docs/integration": "setup, integration, tools, ecosystem",
        "/docs/integration/cli": "command line, macroforge command, expand, terminal",
        "/docs/integration/typescript-plugin": "vscode, ide, language server, intellisense, autocomplete",
        "/docs/integration/vite-plugin": "vite, build, bundler, react, svelte, sveltekit",
        "/docs/integration/svelte-preprocessor": "svelte, preprocessor, svelte components, .svelte files, sveltekit",
        "/docs/integration/mcp-server": "mcp, ai, claude, llm, model context protocol, assistant",
        "/docs/integration/configuration": "macroforge.json, config, settings, options",
        # Language Servers
        "/docs/language-servers": "lsp, language server, editor support",
        "/docs/language-servers/svelte": "svelte, svelte language server, .svelte files",
        "/docs/language-servers/zed": "zed, zed editor, extension",
        # API Reference
        "/docs/api": "api, functions, exports, programmatic",
        "/docs/api/expand-sync": "expandSync, expand, transform, macro expansion",
        "/docs/api/transform-sync": "transformSync, transform, metadata, low-level",
        "/docs/api/native-plugin": "NativePlugin, caching, language server, stateful",
        "/docs/api/position-mapper": "PositionMapper, source map, diagnostics, position",
        # Roadmap
        "/docs/roadmap": "roadmap, future, planned features, upcoming",
    }
)

# Category landing pages get a descriptive id instead of repeating the category
CATEGORY_IDS = MappingProxyType(
    {
        "getting-started": "installation",
        "concepts": "how-macros-work",
        "builtin-macros": "macros-overview",
        "custom-macros": "custom-overview",
        "integration": "integration-overview",
        "language-servers": "ls-overview",
        "api": "api-overview",
        "roadmap": "roadmap",
    }
)


def _doc_parts(href: str) -> list[str]:
    path = href[len(DOCS_PREFIX) :] if href.startswith(DOCS_PREFIX) else href
    return path.rstrip("/").split("/")


def href_to_category(href: str) -> str:
    """Return the category segment of a page href (``/docs/api/x`` -> ``api``)."""
    return _doc_parts(href)[0]


def href_to_id(href: str) -> str:
    """Return the output identifier for a page href.

    Category landing pages (a single segment after ``/docs/``) are mapped
    through ``CATEGORY_IDS``; every other page uses its last segment.
    """
    parts = _doc_parts(href)
    if len(parts) == 1:
        return CATEGORY_IDS.get(parts[0], parts[0])
    return parts[-1]


def href_to_use_cases(href: str, title: str) -> str:
    """Search keywords for a page: the curated entry for its href, else its lowercased title."""
    return USE_CASES.get(href, title.lower())
