from conftest import FIRST_MACRO_HTML
from docs_extract.converter import (
    HTMLToMarkdownConverter,
    cleanup_markdown,
    extract_prose,
    html_to_markdown,
    strip_source_boilerplate,
)

PROSE_HTML = """\
<html><body>
<nav><a href="/">Home</a></nav>
<div class="prose">
<h1>expandSync()</h1>
<p>Expands macros in <code>code</code> and returns the
result. See <a href="/docs/api">the API</a>.</p>
<!--[-->
<h2 id="usage"><a href="#usage" class="anchor">#</a>Using <code>expandSync</code></h2>
<pre class="shiki" data-language="ts"><code><span>const x = 1;</span>
<span>expandSync(x);</span></code></pre>
<ul><li>First</li><li>Second<ul><li>Nested</li></ul></li></ul>
<table><tr><th>Option</th><th>Type</th></tr><tr><td>keep</td><td><code>boolean</code></td></tr></table>
<button>Copy</button>
<script>console.log("hidden")</script>
<svg><text>icon</text></svg>
</div>
</body></html>
"""


def test_strip_source_boilerplate_removes_comment_and_head() -> None:
    source = (
        "<!-- generated -->\n"
        "<svelte:head>\n  <title>Page</title>\n</svelte:head>\n\n"
        "# Title\n\nBody text.\n\n\n"
    )

    assert strip_source_boilerplate(source) == "# Title\n\nBody text.\n"


def test_strip_source_boilerplate_keeps_comments_after_content() -> None:
    source = "# Title\n\n<!-- keep me -->\n"

    assert strip_source_boilerplate(source) == "# Title\n\n<!-- keep me -->\n"


def test_cleanup_markdown_collapses_newlines_and_decodes_entities() -> None:
    markdown = "a\n\n\n\nb &lt;T&gt; &#123;x&#125; &quot;q&quot; &#39;s&#x27; &amp;&nbsp;c\n"

    assert cleanup_markdown(markdown) == "a\n\nb <T> {x} \"q\" 's' & c"


def test_html_to_markdown_converts_prose_region() -> None:
    markdown = html_to_markdown(PROSE_HTML)

    assert markdown.startswith(
        "# expandSync()\n\n"
        "Expands macros in `code` and returns the result. See [the API](/docs/api).\n\n"
        "## Using `expandSync`\n\n"
        "```ts\nconst x = 1;\nexpandSync(x);\n```"
    )
    assert "- First\n- Second\n  - Nested" in markdown
    assert "| Option | Type |\n| --- | --- |\n| keep | `boolean` |" in markdown


def test_html_to_markdown_skips_chrome_and_scripts() -> None:
    markdown = html_to_markdown(PROSE_HTML)

    assert "Home" not in markdown
    assert "Copy" not in markdown
    assert "hidden" not in markdown
    assert "icon" not in markdown
    assert "[-->" not in markdown
    assert "\n\n\n" not in markdown


def test_html_to_markdown_falls_back_to_article() -> None:
    html = "<html><body><article><h2>Title</h2><p>Text &amp; more</p></article></body></html>"

    assert html_to_markdown(html) == "## Title\n\nText & more"


def test_html_to_markdown_without_content_region_is_empty() -> None:
    html = "<html><body><main><p>No prose here</p></main></body></html>"

    assert extract_prose(html) is None
    assert html_to_markdown(html) == ""


def test_prose_region_wins_over_article() -> None:
    html = "<article><p>Article</p></article><div class='prose'><p>Prose</p></div>"

    assert html_to_markdown(html) == "Prose"


def test_first_macro_page() -> None:
    markdown = html_to_markdown(FIRST_MACRO_HTML)

    assert markdown == "# Your First Macro\n\nAdd a `@derive(Debug)` decorator to a class & run the build."


def test_converter_handles_missing_element() -> None:
    assert HTMLToMarkdownConverter().convert(None) == ""


def test_converter_renders_ordered_lists_and_blockquotes() -> None:
    html = (
        "<div class='prose'>"
        "<ol><li>Install</li><li><p>Configure</p></li></ol>"
        "<blockquote><p>Note: <strong>important</strong></p></blockquote>"
        "<hr>"
        "<p><img src='/img/diagram.png' alt='Diagram'></p>"
        "</div>"
    )

    markdown = html_to_markdown(html)

    assert "1. Install\n2. Configure" in markdown
    assert "> Note: **important**" in markdown
    assert "---" in markdown
    assert "![Diagram](/img/diagram.png)" in markdown


def test_line_break_in_paragraph_is_a_hard_break() -> None:
    html = "<div class='prose'><p>line one<br>line two</p></div>"

    assert html_to_markdown(html) == "line one\\\nline two"


def test_trailing_line_break_leaves_no_backslash() -> None:
    html = "<div class='prose'><p>last line<br></p><p><br>next</p></div>"

    assert html_to_markdown(html) == "last line\n\nnext"


def test_line_break_in_table_cell_and_list_item() -> None:
    html = (
        "<div class='prose'>"
        "<table><tr><th>Name</th></tr><tr><td>first<br>second</td></tr></table>"
        "<ul><li>step one<br>continued</li></ul>"
        "</div>"
    )

    markdown = html_to_markdown(html)

    assert "| first<br>second |" in markdown
    assert "- step one\\\n  continued" in markdown
