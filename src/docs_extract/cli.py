"""Command-line interface for the documentation extractor."""

import os

import click
from rich.console import Console
from rich.markup import escape

from docs_extract.extractor import DocsExtractor, ExtractorConfig, find_repo_root

console = Console(stderr=True, soft_wrap=True)


@click.command()
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Project root (default: nearest parent directory containing pixi.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def main(root: str | None, verbose: bool) -> None:
    """Extract website documentation into Markdown files for the MCP server.

    Pages are discovered from website/src/lib/config/navigation.ts and read
    from their +page.svx sources, or from website/build/prerendered when no
    source exists. Output goes to packages/mcp-server/docs.

    Examples:

        docs-extract

        docs-extract --root ../my-checkout -v
    """
    repo_root = os.path.abspath(root) if root else find_repo_root()
    config = ExtractorConfig.from_repo_root(repo_root, verbose=verbose)

    extractor = DocsExtractor(config)

    try:
        extractor.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise click.Abort()
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e


if __name__ == "__main__":
    main()
