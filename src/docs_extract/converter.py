"""Normalize page content (mdsvex sources or prerendered HTML) into Markdown."""

import re

from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

SKIP_TAGS = ["script", "style", "svg", "button", "nav"]

# bs4 node types that carry markup rather than page text
NON_TEXT_STRINGS = (CData, Comment, Declaration, Doctype, ProcessingInstruction)

# Backslash hard break survives the trailing-whitespace strip in convert()
HARD_BREAK = "\\\n"
EDGE_BREAKS_RE = re.compile(r"^(?:\s|\\\n)+|(?:\s|\\\n)+$")

HTML_ENTITIES = [
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&#123;", "{"),
    ("&#125;", "}"),
]

LEADING_COMMENT_RE = re.compile(r"^<!--[\s\S]*?-->\s*")
SVELTE_HEAD_RE = re.compile(r"<svelte:head>[\s\S]*?</svelte:head>\s*")


def strip_source_boilerplate(markdown: str) -> str:
    """Strip the leading comment and ``<svelte:head>`` blocks from an mdsvex page."""
    markdown = LEADING_COMMENT_RE.sub("", markdown, count=1)
    markdown = SVELTE_HEAD_RE.sub("", markdown)
    return markdown.strip() + "\n"


def cleanup_markdown(markdown: str) -> str:
    """Collapse blank-line runs and decode leftover HTML entities."""
    markdown = re.sub(r"\n{3,}", "\n\n", markdown)

    for entity, char in HTML_ENTITIES:
        markdown = markdown.replace(entity, char)

    return markdown.strip()


def extract_prose(html: str) -> Tag | None:
    """Find the main content region of a prerendered page."""
    soup = BeautifulSoup(html, "html.parser")

    prose = soup.select_one("div.prose")
    if prose is not None:
        return prose

    return soup.find("article")


class HTMLToMarkdownConverter:
    """Convert the prose region of a prerendered page to Markdown."""

    def convert(self, element: Tag | None) -> str:
        """Convert BeautifulSoup element to Markdown."""
        if element is None:
            return ""

        lines: list[str] = []
        self._process_element(element, lines, depth=0)

        markdown = "\n".join(lines)

        # Remove trailing whitespace from each line
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        return markdown.strip()

    def _process_element(self, element: Tag | NavigableString, lines: list, depth: int = 0) -> None:
        """Process an HTML element and convert to Markdown."""
        if isinstance(element, NON_TEXT_STRINGS):
            return

        if isinstance(element, NavigableString):
            text = str(element).strip()
            if text:
                lines.append(text)
            return

        if not isinstance(element, Tag):
            return

        tag_name = element.name.lower() if element.name else ""

        if tag_name in SKIP_TAGS:
            return

        if tag_name in ["h1", "h2", "h3", "h4", "h5", "h6"]:
            level = int(tag_name[1])
            text = self._heading_text(element)
            if text:
                lines.append(f"\n{'#' * level} {text}\n")

        elif tag_name == "p":
            text = self._inline_children(element)
            if text:
                lines.append(f"\n{text}\n")

        elif tag_name == "pre":
            self._process_code_block(element, lines)

        elif tag_name == "code":
            # Inline code (not in pre)
            lines.append(f"`{element.get_text()}`")

        elif tag_name in ["ul", "ol"]:
            lines.append("")
            self._process_list(element, lines, indent=0)
            lines.append("")

        elif tag_name == "blockquote":
            inner: list[str] = []
            for child in element.children:
                self._process_element(child, inner, depth + 1)
            text = re.sub(r"\n{3,}", "\n\n", "\n".join(inner)).strip()
            if text:
                quoted = "\n".join(f"> {line}".rstrip() for line in text.split("\n"))
                lines.append(f"\n{quoted}\n")

        elif tag_name == "table":
            self._process_table(element, lines)

        elif tag_name == "a":
            text = self._inline_element(element)
            if text:
                lines.append(text)

        elif tag_name == "img":
            image = self._inline_image(element)
            if image:
                lines.append(f"\n{image}\n")

        elif tag_name == "br":
            lines.append("\n")

        elif tag_name == "hr":
            lines.append("\n---\n")

        elif tag_name in ["strong", "b"]:
            text = element.get_text().strip()
            if text:
                lines.append(f"**{text}**")

        elif tag_name in ["em", "i"]:
            text = element.get_text().strip()
            if text:
                lines.append(f"*{text}*")

        else:
            # Containers (div, section, article, span, ...) - process children
            for child in element.children:
                self._process_element(child, lines, depth + 1)

    def _heading_text(self, element: Tag) -> str:
        """Heading text without permalink anchors, keeping inline code."""
        for anchor in element.find_all("a"):
            href = anchor.get("href", "")
            if href.startswith("#") and anchor.get_text().strip() in ("", "#", "¶"):
                anchor.decompose()
        return self._inline_children(element).replace(HARD_BREAK, " ")

    def _inline_children(self, element: Tag, exclude: tuple[str, ...] = ()) -> str:
        text_parts = []
        for child in element.children:
            if isinstance(child, NON_TEXT_STRINGS):
                continue
            if isinstance(child, NavigableString):
                # Source formatting newlines become single spaces
                text_parts.append(re.sub(r"\s*\n\s*", " ", str(child)))
            elif isinstance(child, Tag) and child.name not in exclude:
                text_parts.append(self._inline_element(child))
        # Hard breaks at either end of the content are dropped
        return EDGE_BREAKS_RE.sub("", "".join(text_parts))

    def _inline_element(self, element: Tag) -> str:
        """Convert inline element to Markdown string."""
        tag_name = element.name.lower() if element.name else ""

        if tag_name in SKIP_TAGS:
            return ""
        elif tag_name == "code":
            return f"`{element.get_text()}`"
        elif tag_name in ["strong", "b"]:
            text = self._inline_children(element)
            return f"**{text}**" if text else ""
        elif tag_name in ["em", "i"]:
            text = self._inline_children(element)
            return f"*{text}*" if text else ""
        elif tag_name == "a":
            img = element.find("img")
            if img:
                return self._inline_image(img)

            href = element.get("href", "")
            text = self._inline_children(element)
            if href and text:
                return f"[{text}]({href})"
            return text
        elif tag_name == "br":
            return HARD_BREAK
        elif tag_name == "img":
            return self._inline_image(element)
        elif tag_name == "p":
            return f" {self._inline_children(element)} "
        else:
            return self._inline_children(element)

    def _inline_image(self, element: Tag) -> str:
        src = element.get("src", "")
        alt = element.get("alt", "")
        if not src or src.startswith("data:"):
            return ""
        return f"![{alt}]({src})"

    def _process_code_block(self, element: Tag, lines: list) -> None:
        code_elem = element.find("code")
        source = code_elem if code_elem else element

        lang = element.get("data-language", "") or source.get("data-language", "")
        if not lang:
            for cls in source.get("class", []):
                if cls.startswith("language-"):
                    lang = cls.replace("language-", "")
                    break

        code_text = source.get_text().rstrip("\n")
        lines.append(f"\n```{lang}\n{code_text}\n```\n")

    def _process_list(self, element: Tag, lines: list, indent: int) -> None:
        """Render a list, recursing into nested lists with deeper indentation."""
        ordered = element.name == "ol"
        prefix = "  " * indent

        for i, li in enumerate(element.find_all("li", recursive=False), 1):
            marker = f"{i}." if ordered else "-"
            text = self._inline_children(li, exclude=("ul", "ol"))
            text = re.sub(r" {2,}", " ", text).replace("\n", "\n" + prefix + "  ")
            lines.append(f"{prefix}{marker} {text}")

            for sublist in li.find_all(["ul", "ol"], recursive=False):
                self._process_list(sublist, lines, indent + 1)

    def _process_table(self, table: Tag, lines: list) -> None:
        """Convert HTML table to Markdown table."""
        rows = table.find_all("tr")
        if not rows:
            return

        lines.append("")

        header_row = rows[0]
        headers = [self._cell_text(th) for th in header_row.find_all(["th", "td"])]
        if headers:
            lines.append("| " + " | ".join(headers) + " |")
            lines.append("| " + " | ".join(["---"] * len(headers)) + " |")

        for row in rows[1:]:
            cells = [self._cell_text(td) for td in row.find_all(["td", "th"])]
            if cells:
                lines.append("| " + " | ".join(cells) + " |")

        lines.append("")

    def _cell_text(self, cell: Tag) -> str:
        return self._inline_children(cell).replace(HARD_BREAK, "<br>").replace("|", "\\|")


def prose_to_markdown(prose: Tag) -> str:
    """Convert an already located prose region to cleaned-up Markdown."""
    return cleanup_markdown(HTMLToMarkdownConverter().convert(prose))


def html_to_markdown(html: str) -> str:
    """Convert a prerendered page to Markdown; empty when it has no prose region."""
    prose = extract_prose(html)
    if prose is None:
        return ""

    return prose_to_markdown(prose)
