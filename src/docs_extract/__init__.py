"""Documentation extractor package.

Turns the website's documentation pages into Markdown files and a
``sections.json`` index for the MCP documentation server.
"""

from docs_extract.extractor import DocsExtractor, ExtractorConfig, ExtractorStats

__all__ = ["DocsExtractor", "ExtractorConfig", "ExtractorStats"]
__version__ = "0.1.0"
