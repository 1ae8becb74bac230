"""Split large Markdown documents into topic-sized chunks at H2 headings."""

import re
from dataclasses import dataclass
from enum import Enum

CHUNK_SIZE_THRESHOLD = 6000
MIN_CHUNK_SIZE = 500

OVERVIEW_SLUG = "overview"

H2_RE = re.compile(r"^## (.+)$", re.MULTILINE)
INLINE_CODE_RE = re.compile(r"`([^`]+)`")
NUMERIC_ENTITY_RE = re.compile(r"&#\d+;")
NAMED_ENTITY_RE = re.compile(r"&[a-z]+;")


@dataclass
class Chunk:
    """A contiguous piece of a document."""

    slug: str
    title: str
    content: str


class _MergeState(Enum):
    EMPTY = "empty"
    PENDING_INTRO = "pending_intro"
    HAS_CHUNKS = "has_chunks"


def header_to_slug(header: str) -> str:
    """Turn a heading into a filename-safe slug.

    >>> header_to_slug("Using `expandSync`")
    'using-expandsync'
    """
    slug = INLINE_CODE_RE.sub(r"\1", header)
    slug = NUMERIC_ENTITY_RE.sub("", slug)
    slug = NAMED_ENTITY_RE.sub("", slug)

    slug = "".join(c for c in slug.lower() if c.isalnum() or c in " -")

    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)

    return slug.strip("-")


def should_chunk(markdown: str) -> bool:
    return len(markdown) > CHUNK_SIZE_THRESHOLD


def chunk_markdown(markdown: str, parent_title: str) -> list[Chunk]:
    """Split ``markdown`` at ``## `` headings.

    Text before the first heading becomes an overview chunk when it is long
    enough, otherwise it is held back and prepended to the first chunk.
    Heading sections shorter than ``MIN_CHUNK_SIZE`` are folded into the
    preceding chunk. A result with fewer than two chunks means the document
    should not be split.
    """
    overview_title = f"{parent_title}: Overview"
    headings = list(H2_RE.finditer(markdown))

    chunks: list[Chunk] = []
    intro = ""
    state = _MergeState.EMPTY

    lead = markdown[: headings[0].start() if headings else len(markdown)].strip()
    if len(lead) >= MIN_CHUNK_SIZE:
        chunks.append(Chunk(slug=OVERVIEW_SLUG, title=overview_title, content=lead))
        state = _MergeState.HAS_CHUNKS
    elif lead:
        intro = lead
        state = _MergeState.PENDING_INTRO

    for index, match in enumerate(headings):
        header = match.group(1)
        end = headings[index + 1].start() if index + 1 < len(headings) else len(markdown)
        body = markdown[match.end() : end].strip()
        full_content = f"## {header}\n\n{body}"

        if len(full_content) < MIN_CHUNK_SIZE and state is _MergeState.HAS_CHUNKS:
            chunks[-1].content += f"\n\n{full_content}"
            continue

        chunks.append(
            Chunk(
                slug=header_to_slug(header) or f"section-{index + 1}",
                title=f"{parent_title}: {header}",
                content=full_content,
            )
        )
        state = _MergeState.HAS_CHUNKS

    if intro:
        if chunks:
            first = chunks[0]
            chunks[0] = Chunk(
                slug=OVERVIEW_SLUG,
                title=overview_title,
                content=f"{intro}\n\n{first.content}",
            )
        else:
            chunks.append(Chunk(slug=OVERVIEW_SLUG, title=overview_title, content=intro))

    _dedupe_slugs(chunks)
    return chunks


def _dedupe_slugs(chunks: list[Chunk]) -> None:
    """Suffix repeated slugs (``setup``, ``setup-2``, ...) so no chunk file is overwritten."""
    seen: set[str] = set()
    for chunk in chunks:
        slug = chunk.slug
        n = 2
        while slug in seen:
            slug = f"{chunk.slug}-{n}"
            n += 1
        chunk.slug = slug
        seen.add(slug)


def extract_chunk_use_cases(content: str, parent_use_cases: str) -> str:
    """Build search keywords for a chunk from its inline code and its parent's keywords."""
    keywords = []
    for match in list(INLINE_CODE_RE.finditer(content))[:5]:
        term = match.group(1).lower()
        if 2 < len(term) < 30 and not any(c.isspace() for c in term):
            keywords.append(term)

    parent_keywords = [k.strip() for k in parent_use_cases.split(",") if k.strip()][:2]

    result: list[str] = []
    for keyword in parent_keywords + keywords:
        if not result or result[-1] != keyword:
            result.append(keyword)

    return ", ".join(result[:6])
