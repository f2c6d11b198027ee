"""Tests for page content extraction (title + main text)."""

from __future__ import annotations

from novelcrawl.scraper.extractor import DEFAULT_TITLE, extract_page, render_text
from novelcrawl.scraper.fetcher import parse_html


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_P1 = "Hello from the first paragraph, where the hero wakes up in a strange inn."
_P2 = "World of the second paragraph, where the innkeeper explains the curse."

_CHAPTER_HTML = f"""\
<!DOCTYPE html>
<html>
<head><title>Site Name - Chapter One</title></head>
<body>
  <nav><a href="/">Home</a> <a href="/novel">Index</a></nav>
  <h1>Chapter One</h1>
  <div class="content">
    <p>{_P1}</p>
    <p>{_P2}</p>
  </div>
  <script>var tracking = "do not extract";</script>
  <footer>Copyright footer text</footer>
</body>
</html>
"""


def _long(label: str) -> str:
    return " ".join(f"{label} sentence number {i} keeps the story going." for i in range(4))


# ---------------------------------------------------------------------------
# Title resolution
# ---------------------------------------------------------------------------

class TestTitle:
    def test_h1_preferred(self) -> None:
        page = extract_page(parse_html(_CHAPTER_HTML))
        assert page.title == "Chapter One"

    def test_title_tag_when_no_h1(self) -> None:
        html = f"<html><head><title> The  Title </title></head><body><p>{_long('x')}</p></body></html>"
        assert extract_page(parse_html(html)).title == "The Title"

    def test_og_title_when_no_h1_or_title(self) -> None:
        html = (
            '<html><head><meta property="og:title" content="Foo"></head>'
            f"<body><p>{_long('x')}</p></body></html>"
        )
        assert extract_page(parse_html(html)).title == "Foo"

    def test_default_title(self) -> None:
        html = f"<html><body><p>{_long('x')}</p></body></html>"
        assert extract_page(parse_html(html)).title == DEFAULT_TITLE

    def test_h1_inside_site_header_ignored(self) -> None:
        html = (
            "<html><head><title>Real Chapter</title></head><body>"
            "<header><h1>Site Banner</h1></header>"
            f"<div id=\"content\">{_long('x')}</div></body></html>"
        )
        assert extract_page(parse_html(html)).title == "Real Chapter"


# ---------------------------------------------------------------------------
# Content resolution
# ---------------------------------------------------------------------------

class TestContent:
    def test_paragraphs_become_paragraph_breaks(self) -> None:
        page = extract_page(parse_html(_CHAPTER_HTML))
        assert page.content == f"{_P1}\n\n{_P2}"

    def test_noise_removed(self) -> None:
        page = extract_page(parse_html(_CHAPTER_HTML))
        assert "tracking" not in page.content
        assert "Copyright" not in page.content
        assert "Home" not in page.content

    def test_br_tags_become_line_breaks(self) -> None:
        html = (
            '<html><body><div id="content">'
            f"{_long('one')}<br>{_long('two')}<br><br>{_long('three')}"
            "</div></body></html>"
        )
        content = extract_page(parse_html(html)).content
        assert content == f"{_long('one')}\n{_long('two')}\n\n{_long('three')}"

    def test_selector_order_prefers_content_id(self) -> None:
        html = (
            "<html><body>"
            f"<article>{_long('article')}</article>"
            f"<div id=\"content\">{_long('content')}</div>"
            "</body></html>"
        )
        content = extract_page(parse_html(html)).content
        assert content == _long("content")

    def test_short_container_falls_back_to_body(self) -> None:
        html = (
            "<html><body>"
            '<div class="content">Too short.</div>'
            f"<section>{_long('body')}</section>"
            "</body></html>"
        )
        content = extract_page(parse_html(html)).content
        assert "Too short." in content
        assert _long("body") in content

    def test_body_fallback_keeps_short_text(self) -> None:
        html = "<html><body><p>Only a few words here.</p></body></html>"
        assert extract_page(parse_html(html)).content == "Only a few words here."

    def test_comments_skipped(self) -> None:
        html = f"<html><body><main><!-- hidden note -->{_long('main')}</main></body></html>"
        content = extract_page(parse_html(html)).content
        assert "hidden note" not in content

    def test_original_document_not_modified(self) -> None:
        doc = parse_html(_CHAPTER_HTML)
        extract_page(doc)
        assert doc.find("nav") is not None
        assert doc.find("script") is not None

    def test_empty_document_does_not_raise(self) -> None:
        page = extract_page(parse_html("<html></html>"))
        assert page.content == ""
        assert page.title == DEFAULT_TITLE


class TestRenderText:
    def test_inline_elements_do_not_break_lines(self) -> None:
        doc = parse_html("<p>one <b>two</b> <i>three</i></p>")
        assert render_text(doc).strip() == "one two three"

    def test_list_items_separated(self) -> None:
        doc = parse_html("<ul><li>a</li><li>b</li></ul>")
        assert [line for line in render_text(doc).split("\n") if line] == ["a", "b"]

    def test_nested_blocks_keep_document_order(self) -> None:
        doc = parse_html("<div>a<div>b<br>c</div>d</div><p>e</p>")
        assert [line for line in render_text(doc).split("\n") if line] == ["a", "b", "c", "d", "e"]

    def test_nesting_deeper_than_recursion_limit(self) -> None:
        depth = 3000
        doc = parse_html("<div>" * depth + "deep text" + "</div>" * depth)

        assert render_text(doc).strip() == "deep text"
        assert extract_page(doc).content == "deep text"
