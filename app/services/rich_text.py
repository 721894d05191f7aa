"""
Prismic structured text to HTML.

Rendered markup is injected into post pages as-is, so the renderer is the
trust boundary: every text run is escaped while it is built and the final
HTML goes through bleach before it leaves this module.
"""

import html
import logging
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

import bleach

from app.schemas.blog import ContentBlock, RenderedBlock, RichTextSpan

logger = logging.getLogger(__name__)

ALLOWED_TAGS = bleach.sanitizer.ALLOWED_TAGS.union(
    {
        "p",
        "pre",
        "br",
        "span",
        "div",
        "img",
        "iframe",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
    }
)
ALLOWED_ATTRIBUTES = {
    **bleach.sanitizer.ALLOWED_ATTRIBUTES,
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "width", "height"],
    "p": ["class"],
    "span": ["class"],
    "div": ["data-oembed", "data-oembed-type", "data-oembed-provider"],
    "iframe": ["src", "width", "height", "frameborder", "allowfullscreen"],
}
ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

_HEADINGS = {f"heading{level}": f"h{level}" for level in range(1, 7)}
_LISTS = {"list-item": "ul", "o-list-item": "ol"}


class RichTextRenderer(Protocol):
    def as_html(self, spans: Sequence[RichTextSpan]) -> str: ...


def sanitize_html(markup: str) -> str:
    if not markup:
        return ""
    return bleach.clean(
        markup,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


class PrismicHtmlRenderer:
    """Renders Prismic rich-text nodes the way prismic-dom's ``asHtml`` does."""

    def as_html(self, spans: Sequence[RichTextSpan]) -> str:
        parts: List[str] = []
        open_list: Optional[str] = None

        for node in spans:
            node_type = node.get("type")
            list_tag = _LISTS.get(node_type)

            if open_list and list_tag != open_list:
                parts.append(f"</{open_list}>")
                open_list = None
            if list_tag and not open_list:
                parts.append(f"<{list_tag}>")
                open_list = list_tag

            parts.append(self._render_node(node))

        if open_list:
            parts.append(f"</{open_list}>")
        return sanitize_html("".join(parts))

    def _render_node(self, node: RichTextSpan) -> str:
        node_type = node.get("type")
        if node_type == "image":
            return self._render_image(node)
        if node_type == "embed":
            return self._render_embed(node)

        inner = render_text(node.get("text") or "", node.get("spans") or [])
        if node_type in _HEADINGS:
            tag = _HEADINGS[node_type]
            return f"<{tag}>{inner}</{tag}>"
        if node_type in _LISTS:
            return f"<li>{inner}</li>"
        if node_type == "preformatted":
            return f"<pre>{inner}</pre>"
        return f"<p>{inner}</p>"

    @staticmethod
    def _render_image(node: RichTextSpan) -> str:
        src = html.escape(node.get("url") or "", quote=True)
        alt = html.escape(node.get("alt") or "", quote=True)
        return f'<p class="block-img"><img src="{src}" alt="{alt}" /></p>'

    @staticmethod
    def _render_embed(node: RichTextSpan) -> str:
        oembed = node.get("oembed") or {}
        attrs = " ".join(
            f'{name}="{html.escape(str(oembed.get(key) or ""), quote=True)}"'
            for name, key in (
                ("data-oembed", "embed_url"),
                ("data-oembed-type", "type"),
                ("data-oembed-provider", "provider_name"),
            )
        )
        # oEmbed html comes from the provider; bleach strips what is not allowed
        return f"<div {attrs}>{oembed.get('html') or ''}</div>"


def _escape(text: str) -> str:
    return html.escape(text, quote=False).replace("\n", "<br />")


def _sort_key(span: dict):
    return (span["start"], -span["end"])


def _wrap(span: dict, inner: str) -> str:
    span_type = span.get("type")
    data = span.get("data") or {}
    if span_type == "strong":
        return f"<strong>{inner}</strong>"
    if span_type == "em":
        return f"<em>{inner}</em>"
    if span_type == "hyperlink":
        href = html.escape(data.get("url") or "", quote=True)
        if data.get("target"):
            target = html.escape(data["target"], quote=True)
            return f'<a href="{href}" target="{target}" rel="noopener">{inner}</a>'
        return f'<a href="{href}">{inner}</a>'
    if span_type == "label":
        label = html.escape(data.get("label") or "", quote=True)
        return f'<span class="{label}">{inner}</span>'
    return inner


def _utf16_boundaries(text: str) -> Dict[int, int]:
    """Map UTF-16 code unit offsets to code point indices of ``text``."""
    boundaries = {0: 0}
    units = 0
    for index, char in enumerate(text, start=1):
        units += 2 if ord(char) > 0xFFFF else 1
        boundaries[units] = index
    return boundaries


def _to_index(boundaries: Dict[int, int], offset) -> Optional[int]:
    if not isinstance(offset, int):
        return None
    return boundaries.get(offset)


def render_text(text: str, spans: Iterable[dict]) -> str:
    """
    Apply inline formatting spans to ``text``, nesting overlapping spans.
    Span offsets count UTF-16 code units, as Prismic emits them.
    """
    boundaries = _utf16_boundaries(text)
    valid = []
    for span in spans:
        start = _to_index(boundaries, span.get("start"))
        end = _to_index(boundaries, span.get("end"))
        # offsets outside the text or inside a surrogate pair are dropped
        if start is None or end is None or start >= end:
            continue
        valid.append({**span, "start": start, "end": end})
    return _render_range(text, 0, len(text), sorted(valid, key=_sort_key))


def _render_range(text: str, start: int, end: int, spans: List[dict]) -> str:
    out: List[str] = []
    pos = start
    pending = list(spans)

    while pending:
        span = pending.pop(0)
        if span["end"] <= pos:
            continue
        if span["start"] < pos:
            span = {**span, "start": pos}

        out.append(_escape(text[pos : span["start"]]))

        inner: List[dict] = []
        rest: List[dict] = []
        for other in pending:
            if other["start"] < span["end"]:
                inner.append({**other, "end": min(other["end"], span["end"])})
                if other["end"] > span["end"]:
                    rest.append({**other, "start": span["end"]})
            else:
                rest.append(other)
        pending = sorted(rest, key=_sort_key)

        body = _render_range(
            text, span["start"], span["end"], sorted(inner, key=_sort_key)
        )
        out.append(_wrap(span, body))
        pos = span["end"]

    out.append(_escape(text[pos:end]))
    return "".join(out)


def render_blocks(
    content: Sequence[ContentBlock], renderer: RichTextRenderer
) -> List[RenderedBlock]:
    seen = set()
    rendered = []
    for block in content:
        if block.heading in seen:
            logger.warning(f"Duplicate content heading {block.heading!r}")
        seen.add(block.heading)
        rendered.append(
            RenderedBlock(heading=block.heading, html=renderer.as_html(block.body))
        )
    return rendered
