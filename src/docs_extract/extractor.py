"""Core extraction pipeline: navigation -> content -> chunks -> markdown files + sections.json."""

import json
import os
from dataclasses import dataclass, field
from enum import Enum

from rich.console import Console
from rich.markup import escape

from docs_extract.catalog import href_to_category, href_to_id, href_to_use_cases
from docs_extract.chunker import chunk_markdown, extract_chunk_use_cases, should_chunk
from docs_extract.converter import extract_prose, prose_to_markdown, strip_source_boilerplate
from docs_extract.errors import ExtractionError
from docs_extract.navigation import NavItem, NavSection, load_navigation

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

ROOT_MARKER = "pixi.toml"
SOURCE_TEMPLATE = "+page.svx"
MANIFEST_NAME = "sections.json"


def find_repo_root(start: str | None = None) -> str:
    """Walk up from ``start`` to the directory holding ``pixi.toml``.

    Falls back to ``start`` (the current directory by default) when no
    marker is found.
    """
    start = os.path.abspath(start or os.getcwd())
    candidate = start

    while True:
        if os.path.exists(os.path.join(candidate, ROOT_MARKER)):
            return candidate
        parent = os.path.dirname(candidate)
        if parent == candidate:
            return start
        candidate = parent


@dataclass
class ExtractorConfig:
    """Paths used by the extractor."""

    repo_root: str
    website_dir: str
    prerendered_dir: str
    navigation_path: str
    source_dir: str
    output_dir: str
    verbose: bool = False

    @classmethod
    def from_repo_root(cls, repo_root: str, verbose: bool = False) -> "ExtractorConfig":
        website_dir = os.path.join(repo_root, "website")
        return cls(
            repo_root=repo_root,
            website_dir=website_dir,
            prerendered_dir=os.path.join(website_dir, "build", "prerendered"),
            navigation_path=os.path.join(website_dir, "src", "lib", "config", "navigation.ts"),
            source_dir=os.path.join(website_dir, "src", "routes"),
            output_dir=os.path.join(repo_root, "packages", "mcp-server", "docs"),
            verbose=verbose,
        )

    @property
    def manifest_path(self) -> str:
        return os.path.join(self.output_dir, MANIFEST_NAME)


@dataclass
class ExtractorStats:
    """Statistics for the extraction run."""

    discovered: int = 0
    from_source: int = 0
    from_html: int = 0
    chunked: int = 0
    skipped: int = 0
    sections: int = 0


class ContentOrigin(Enum):
    SOURCE = "source"
    HTML = "html"


@dataclass
class ResolvedContent:
    markdown: str
    origin: ContentOrigin


@dataclass
class DocSection:
    """One record of ``sections.json``."""

    id: str
    title: str
    category: str
    category_title: str
    path: str
    use_cases: str
    is_chunked: bool | None = None
    chunk_ids: list[str] | None = None
    parent_id: str | None = None

    def to_dict(self) -> dict:
        """Serializable form; unset optional fields are left out."""
        data = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "category_title": self.category_title,
            "path": self.path,
            "use_cases": self.use_cases,
        }
        if self.is_chunked is not None:
            data["is_chunked"] = self.is_chunked
        if self.chunk_ids is not None:
            data["chunk_ids"] = list(self.chunk_ids)
        if self.parent_id is not None:
            data["parent_id"] = self.parent_id
        return data


def write_manifest(sections: list[DocSection], path: str) -> None:
    """Write ``sections`` as pretty-printed JSON, replacing any existing file."""
    payload = json.dumps([section.to_dict() for section in sections], indent=2, ensure_ascii=False)
    with open(path, "w", encoding="utf-8") as f:
        f.write(payload)


def _write_file(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def _read_file(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


@dataclass
class _PageOutput:
    files: list[tuple[str, str]] = field(default_factory=list)
    records: list[DocSection] = field(default_factory=list)
    chunk_count: int = 0


class DocsExtractor:
    """Extract documentation pages into Markdown files and a sections manifest."""

    def __init__(self, config: ExtractorConfig):
        self.config = config
        self.stats = ExtractorStats()
        self.sections: list[DocSection] = []
        self.has_prerendered = os.path.isdir(config.prerendered_dir)
        self._emitted_ids: set[str] = set()

    def _warn(self, message: str) -> None:
        err_console.print(f"[yellow]Warning: {escape(message)}[/yellow]")

    def source_path(self, href: str) -> str:
        """Path of the page's mdsvex source (``<routes>/<href>/+page.svx``)."""
        return os.path.join(self.config.source_dir, href.strip("/"), SOURCE_TEMPLATE)

    def prerendered_path(self, href: str) -> str:
        """Path of the page's prerendered HTML (``<prerendered>/<href>.html``)."""
        return os.path.join(self.config.prerendered_dir, href.strip("/") + ".html")

    def resolve_content(self, href: str) -> ResolvedContent | None:
        """Load a page, preferring its mdsvex source over the prerendered HTML.

        Returns ``None`` (after printing a warning) when the page cannot be
        found or read.
        """
        source_path = self.source_path(href)
        if os.path.isfile(source_path):
            try:
                markdown = strip_source_boilerplate(_read_file(source_path))
                return ResolvedContent(markdown, ContentOrigin.SOURCE)
            except (OSError, UnicodeDecodeError) as e:
                self._warn(f"Could not read {source_path}: {e}")

        if not self.has_prerendered:
            self._warn(f"No source markdown for {href} and no prerendered HTML")
            return None

        html_path = self.prerendered_path(href)
        if not os.path.isfile(html_path):
            self._warn(f"File not found: {html_path}")
            return None

        try:
            raw_html = _read_file(html_path)
        except (OSError, UnicodeDecodeError) as e:
            self._warn(f"Could not read {html_path}: {e}")
            return None

        prose = extract_prose(raw_html)
        if prose is None:
            self._warn(f"No content region found in {html_path}")
            return None

        markdown = prose_to_markdown(prose)
        if not markdown:
            self._warn(f"Content region in {html_path} is empty")
            return None

        return ResolvedContent(markdown, ContentOrigin.HTML)

    def build_page(self, item: NavItem, section: NavSection, markdown: str) -> _PageOutput:
        """Plan the files and manifest records for one page without touching disk."""
        category = href_to_category(item.href)
        item_id = href_to_id(item.href)
        use_cases = href_to_use_cases(item.href, item.title)
        output = _PageOutput()

        if should_chunk(markdown):
            chunks = chunk_markdown(markdown, item.title)

            if len(chunks) > 1:
                output.chunk_count = len(chunks)
                chunk_ids = []

                for chunk in chunks:
                    chunk_id = f"{item_id}/{chunk.slug}"
                    chunk_ids.append(chunk_id)
                    output.files.append((f"{category}/{item_id}/{chunk.slug}.md", chunk.content))
                    output.records.append(
                        DocSection(
                            id=chunk_id,
                            title=chunk.title,
                            category=category,
                            category_title=section.title,
                            path=f"{category}/{item_id}/{chunk.slug}.md",
                            use_cases=extract_chunk_use_cases(chunk.content, use_cases),
                            parent_id=item_id,
                        )
                    )

                output.files.append((f"{category}/{item_id}.md", markdown))
                output.records.append(
                    DocSection(
                        id=item_id,
                        title=item.title,
                        category=category,
                        category_title=section.title,
                        path=f"{category}/{item_id}.md",
                        use_cases=use_cases,
                        is_chunked=True,
                        chunk_ids=chunk_ids,
                    )
                )
                return output

        output.files.append((f"{category}/{item_id}.md", markdown))
        output.records.append(
            DocSection(
                id=item_id,
                title=item.title,
                category=category,
                category_title=section.title,
                path=f"{category}/{item_id}.md",
                use_cases=use_cases,
            )
        )
        return output

    def process_item(self, item: NavItem, section: NavSection) -> bool:
        """Resolve, convert, chunk and write one page. Returns False if it was skipped."""
        console.print(f"Processing: {escape(item.title)} ({escape(item.href)})")

        item_id = href_to_id(item.href)
        if item_id in self._emitted_ids:
            self._warn(f"Duplicate id '{item_id}' for {item.href}, skipping")
            return False

        resolved = self.resolve_content(item.href)
        if resolved is None:
            return False

        if self.config.verbose:
            console.print(f"[dim]  from {resolved.origin.value}[/dim]")

        output = self.build_page(item, section, resolved.markdown)
        if output.chunk_count:
            console.print(f"  → Chunking into {output.chunk_count} parts")

        try:
            for relative_path, content in output.files:
                local_path = os.path.join(self.config.output_dir, *relative_path.split("/"))
                os.makedirs(os.path.dirname(local_path), exist_ok=True)
                _write_file(local_path, content)
                if self.config.verbose:
                    console.print(f"[dim]  wrote {escape(local_path)}[/dim]")
        except OSError as e:
            self._warn(f"Could not write output for {item.href}: {e}")
            return False

        self._emitted_ids.add(item_id)
        self.sections.extend(output.records)

        if resolved.origin is ContentOrigin.SOURCE:
            self.stats.from_source += 1
        else:
            self.stats.from_html += 1
        if output.chunk_count:
            self.stats.chunked += 1

        return True

    def run(self) -> ExtractorStats:
        """Run the extractor."""
        console.print("[bold blue]Docs Extractor[/bold blue]")
        console.print(f"  Root: {escape(self.config.repo_root)}")
        console.print(f"  Output: {escape(self.config.output_dir)}")
        console.print()

        if not self.has_prerendered:
            self._warn(f"Prerendered directory not found: {self.config.prerendered_dir}")
            err_console.print("[yellow]Falling back to mdsvex source pages when available.[/yellow]")
            err_console.print()

        console.print("[cyan]Auto-discovering pages from navigation.ts...[/cyan]")
        navigation = load_navigation(self.config.navigation_path)
        console.print(f"Found {len(navigation)} sections in navigation.ts")
        console.print()

        try:
            os.makedirs(self.config.output_dir, exist_ok=True)
        except OSError as e:
            raise ExtractionError(f"Failed to create output directory {self.config.output_dir}: {e}") from e

        for section in navigation:
            for item in section.items:
                self.stats.discovered += 1
                if not self.process_item(item, section):
                    self.stats.skipped += 1

        write_manifest(self.sections, self.config.manifest_path)
        self.stats.sections = len(self.sections)

        # Print summary
        console.print()
        console.print(f"[bold green]✓ Extracted {self.stats.sections} documentation sections[/bold green]")
        console.print(f"  Output directory: {escape(self.config.output_dir)}")
        console.print(f"  Pages: {self.stats.discovered} discovered, {self.stats.skipped} skipped")
        console.print(f"  Sources: {self.stats.from_source} mdsvex, {self.stats.from_html} prerendered")
        console.print(f"  Chunked: {self.stats.chunked} documents")

        return self.stats
