"""Pure conversions: HTML to Markdown, and result lists to every output format.

html_to_markdown is a best-effort regex pass, not a DOM walk. Malformed HTML may
produce malformed Markdown; the output is meant for reading, not round-tripping.
"""

from __future__ import annotations

import html
import json
import re
from collections.abc import Sequence

from models.formatted_response import ResponseFormat

from .contracts import DeepSearchEntry, SearchResult

NO_DESCRIPTION = "No description"

_FLAGS = re.IGNORECASE | re.DOTALL

_SCRIPT_STYLE_RE = re.compile(r"<(script|style|noscript)[^>]*>.*?</\1\s*>", _FLAGS)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_HEADING_RE = re.compile(r"<h[1-6][^>]*>(.*?)</h[1-6]\s*>", _FLAGS)
_BOLD_RE = re.compile(r"<(strong|b)(?:\s[^>]*)?>(.*?)</\1\s*>", _FLAGS)
_ITALIC_RE = re.compile(r"<(em|i)(?:\s[^>]*)?>(.*?)</\1\s*>", _FLAGS)
_LINK_RE = re.compile(r"<a\s[^>]*?href=[\"']([^\"']*)[\"'][^>]*>(.*?)</a\s*>", _FLAGS)
_LIST_RE = re.compile(r"<(ul|ol)[^>]*>(.*?)</\1\s*>", _FLAGS)
_LIST_ITEM_RE = re.compile(r"<li[^>]*>(.*?)</li\s*>", _FLAGS)
_PARAGRAPH_RE = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p\s*>", _FLAGS)
_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_BLANK_RUN_RE = re.compile(r"\n\s*\n")


def _convert_list(match: re.Match) -> str:
    ordered = match.group(1).lower() == "ol"
    items = [item.strip() for item in _LIST_ITEM_RE.findall(match.group(2))]
    if ordered:
        lines = [f"{idx}. {item}" for idx, item in enumerate(items, start=1)]
    else:
        lines = [f"- {item}" for item in items]
    return "\n" + "\n".join(lines) + "\n"


def html_to_markdown(markup: str) -> str:
    """Convert an HTML fragment or document to Markdown by sequential substitution."""
    text = _SCRIPT_STYLE_RE.sub("", markup)
    text = _COMMENT_RE.sub("", text)
    text = _HEADING_RE.sub(lambda m: f"\n# {m.group(1).strip()}\n", text)
    text = _BOLD_RE.sub(r"**\2**", text)
    text = _ITALIC_RE.sub(r"*\2*", text)
    text = _LINK_RE.sub(r"[\2](\1)", text)
    text = _LIST_RE.sub(_convert_list, text)
    text = _PARAGRAPH_RE.sub(r"\n\1\n", text)
    text = _BREAK_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


# -------------------------------------------------------------------
# Search result rendering
# -------------------------------------------------------------------


def _render_results_json(results: Sequence[SearchResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)


def _render_results_markdown(results: Sequence[SearchResult]) -> str:
    blocks = [
        f"{idx}. **{r.title}**\n   - URL: {r.url}\n   - Description: {r.description or NO_DESCRIPTION}"
        for idx, r in enumerate(results, start=1)
    ]
    return "\n\n".join(blocks)


def _render_results_html(results: Sequence[SearchResult]) -> str:
    blocks = []
    for r in results:
        url = html.escape(r.url, quote=True)
        blocks.append(
            '<div class="search-result">\n'
            f'  <h3><a href="{url}">{html.escape(r.title)}</a></h3>\n'
            f'  <div class="url">{html.escape(r.url)}</div>\n'
            f'  <p class="description">{html.escape(r.description or NO_DESCRIPTION)}</p>\n'
            "</div>"
        )
    return "\n".join(blocks)


def _render_results_text(results: Sequence[SearchResult]) -> str:
    blocks = [
        f"{idx}. {r.title}\n   URL: {r.url}\n   Description: {r.description or NO_DESCRIPTION}"
        for idx, r in enumerate(results, start=1)
    ]
    return "\n\n".join(blocks)


_RESULT_RENDERERS = {
    ResponseFormat.JSON: _render_results_json,
    ResponseFormat.MARKDOWN: _render_results_markdown,
    ResponseFormat.HTML: _render_results_html,
    ResponseFormat.TEXT: _render_results_text,
}


def render_results(results: Sequence[SearchResult], response_format: ResponseFormat) -> str:
    """
    Render extracted search results in the requested format.

    An empty result list renders as "[]" for JSON and as an empty string otherwise.
    """
    renderer = _RESULT_RENDERERS.get(ResponseFormat(response_format), _render_results_json)
    return renderer(results)


# -------------------------------------------------------------------
# Deep search rendering
# -------------------------------------------------------------------


def _render_deep_markdown(entries: Sequence[DeepSearchEntry]) -> str:
    blocks = [
        f"## [{e.url}]\n\n{e.content}" if e.ok else f"## [Failed to fetch: {e.url}]\nError: {e.error}"
        for e in entries
    ]
    return "\n\n---\n\n".join(blocks)


def _render_deep_html(entries: Sequence[DeepSearchEntry]) -> str:
    blocks = []
    for e in entries:
        url = html.escape(e.url, quote=True)
        if e.ok:
            blocks.append(
                f'<div class="search-result"><h2><a href="{url}">{html.escape(e.url)}</a></h2>'
                f"{e.content}</div>"
            )
        else:
            blocks.append(
                f'<div class="search-result error"><h2><a href="{url}">Failed to fetch</a></h2>'
                f'<p class="error">{html.escape(e.error or "")}</p></div>'
            )
    return "\n".join(blocks)


def _render_deep_text(entries: Sequence[DeepSearchEntry]) -> str:
    blocks = [
        f"### {e.url}\n\n{e.content}" if e.ok else f"### {e.url}\nError: {e.error}" for e in entries
    ]
    return "\n\n==========\n\n".join(blocks)


def _render_deep_json(entries: Sequence[DeepSearchEntry]) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


_DEEP_RENDERERS = {
    ResponseFormat.JSON: _render_deep_json,
    ResponseFormat.MARKDOWN: _render_deep_markdown,
    ResponseFormat.HTML: _render_deep_html,
    ResponseFormat.TEXT: _render_deep_text,
}


def render_deep_results(entries: Sequence[DeepSearchEntry], response_format: ResponseFormat) -> str:
    """Render per-URL deep search content, failures included, in extraction order."""
    renderer = _DEEP_RENDERERS.get(ResponseFormat(response_format), _render_deep_json)
    return renderer(entries)
