"""
Rich text renderer - CMS document tree to HTML.

Converts a CMS rich-text field (a tree of typed block and inline nodes)
into a semantic HTML string, resolving embedded image references against
the `includes.Asset` side-table returned with the query.

Key behaviors:
- Parses loosely-typed JSON into the tagged node variants in `models`
- Unknown node types render nothing; malformed or empty documents render
  a fixed fallback paragraph
- Marks nest in a fixed order regardless of their input order
- List items render plain text (marks are not applied inside `<li>`)
- Asset URLs are normalized to https; unsafe protocols are dropped
- Pure: no I/O, never mutates its inputs, never raises for bad input
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .models import (
    MARK_ORDER,
    MARK_TAGS,
    Asset,
    AssetLink,
    AssetTable,
    Blockquote,
    EmbeddedAssetBlock,
    EmbeddedEntryBlock,
    Heading,
    ListItem,
    MarkKind,
    Node,
    OrderedList,
    Paragraph,
    RichDocument,
    RichTextWarning,
    TextSpan,
    UnknownNode,
    UnorderedList,
)
from .ports import RulesPort

logger = logging.getLogger(__name__)

FALLBACK_HTML = "<p>Content could not be loaded.</p>"
DEFAULT_IMAGE_ALT = "Content Image"
EMBEDDED_ENTRY_LABEL = "Embedded content"

# --- Configuration ---


@dataclass(frozen=True)
class RichTextConfig:
    """Renderer configuration from rules."""

    fallback_html: str = FALLBACK_HTML
    default_image_alt: str = DEFAULT_IMAGE_ALT
    embedded_entry_label: str = EMBEDDED_ENTRY_LABEL

    # Image URLs using these protocols are treated as unresolved
    forbid_protocols: frozenset[str] = field(
        default_factory=lambda: frozenset(
            [
                "javascript:",
                "data:",
                "vbscript:",
            ]
        )
    )

    # Optional class attribute per tag, e.g. {"p": "mb-4 leading-relaxed"}.
    # Extra keys: "caption" (image caption) and "placeholder" (embedded entry).
    class_names: Mapping[str, str] = field(default_factory=dict)


DEFAULT_CONFIG = RichTextConfig()


def config_from_rules(rules: RulesPort | None) -> RichTextConfig:
    """Build renderer config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    return RichTextConfig(
        fallback_html=rules.get_fallback_html(),
        default_image_alt=rules.get_default_image_alt(),
        embedded_entry_label=rules.get_embedded_entry_label(),
        forbid_protocols=rules.get_forbidden_protocols(),
        class_names=rules.get_class_names(),
    )


# --- Node Type Tags ---

HEADING_LEVELS: dict[str, int] = {
    "heading-1": 1,
    "heading-2": 2,
    "heading-3": 3,
}

KNOWN_NODE_TYPES: frozenset[str] = frozenset(
    [
        "paragraph",
        *HEADING_LEVELS,
        "blockquote",
        "unordered-list",
        "ordered-list",
        "embedded-asset-block",
        "embedded-entry-block",
    ]
)

_MARKS_BY_TYPE: dict[str, MarkKind] = {kind.value: kind for kind in MarkKind}

_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
_WHITESPACE_PATTERN = re.compile(r"\s+")

_END = object()


# --- Loose JSON Access ---


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_sequence(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return []


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


# --- Parsing ---


def parse_marks(raw: Any) -> frozenset[MarkKind]:
    """
    Parse a marks list into a set of known mark kinds.

    Accepts `[{"type": "bold"}]`, `["bold"]` or `MarkKind` members.
    Unknown mark types are dropped.
    """
    kinds: set[MarkKind] = set()
    for mark in _as_sequence(raw):
        mark_type = mark.get("type") if isinstance(mark, dict) else mark
        if isinstance(mark_type, MarkKind):
            kinds.add(mark_type)
        elif isinstance(mark_type, str) and mark_type in _MARKS_BY_TYPE:
            kinds.add(_MARKS_BY_TYPE[mark_type])
    return frozenset(kinds)


def parse_spans(children: Any) -> tuple[TextSpan, ...]:
    """
    Collect the text spans under a node, in document order.

    Text nodes (`nodeType == "text"` or carrying a `value`) become spans.
    Any other child (a nested paragraph, a hyperlink) is flattened into
    its own text spans. Walks iteratively so deep trees cannot exhaust
    the stack.
    """
    spans: list[TextSpan] = []
    stack: list[Iterator[Any]] = [iter(_as_sequence(children))]
    seen: set[int] = set()

    while stack:
        child = next(stack[-1], _END)
        if child is _END:
            stack.pop()
            continue
        if not isinstance(child, dict):
            continue

        if child.get("nodeType") == "text" or "value" in child:
            spans.append(
                TextSpan(
                    value=_text(child.get("value")),
                    marks=parse_marks(child.get("marks")),
                )
            )
        elif id(child) not in seen:
            seen.add(id(child))
            stack.append(iter(_as_sequence(child.get("content"))))

    return tuple(spans)


def parse_asset(raw: Any, asset_id: str | None = None) -> Asset | None:
    """
    Parse a CMS asset entry.

    Supports the delivery API shape
    (`{"sys": {"id"}, "fields": {"title", "description", "file": {...}}}`)
    and the flat shape (`{"id", "title", "fileUrl", ...}`).
    Returns None when the entry carries no asset fields.
    """
    if isinstance(raw, Asset):
        return raw

    data = _as_dict(raw)
    fields = data.get("fields")

    if isinstance(fields, dict):
        sys = _as_dict(data.get("sys"))
        file = _as_dict(fields.get("file"))
        image = _as_dict(_as_dict(file.get("details")).get("image"))
        return Asset(
            id=_text(sys.get("id")) or asset_id or "",
            title=_text(fields.get("title")),
            file_url=_text(file.get("url")),
            description=_text(fields.get("description")) or None,
            width=_int(image.get("width")),
            height=_int(image.get("height")),
        )

    if "fileUrl" in data:
        return Asset(
            id=_text(data.get("id")) or asset_id or "",
            title=_text(data.get("title")),
            file_url=_text(data.get("fileUrl")),
            description=_text(data.get("description")) or None,
            width=_int(data.get("width")),
            height=_int(data.get("height")),
        )

    return None


def build_asset_table(includes: Any) -> dict[str, Asset]:
    """
    Build an id -> Asset lookup from a query's includes.

    Accepts the `includes` object (`{"Asset": [...]}`), a bare list of raw
    assets, or a mapping already keyed by asset id. The input is never
    mutated; the first asset seen for an id wins.
    """
    if includes is None:
        return {}

    if isinstance(includes, Mapping):
        if "Asset" not in includes:
            table: dict[str, Asset] = {}
            for key, value in includes.items():
                asset = parse_asset(value, asset_id=_text(key))
                if asset is not None:
                    table[_text(key)] = asset
            return table
        entries = _as_sequence(includes.get("Asset"))
    else:
        entries = _as_sequence(includes)

    table = {}
    for entry in entries:
        asset = parse_asset(entry)
        if asset is not None and asset.id and asset.id not in table:
            table[asset.id] = asset
    return table


def parse_asset_link(target: Any) -> AssetLink | None:
    """Parse the `data.target` of an embedded asset block."""
    if isinstance(target, Asset):
        return AssetLink(asset_id=target.id, inline=target)
    if isinstance(target, AssetLink):
        return target

    data = _as_dict(target)
    if not data:
        return None

    asset_id = _text(_as_dict(data.get("sys")).get("id")) or None
    inline = parse_asset(data) if isinstance(data.get("fields"), dict) else None
    return AssetLink(asset_id=asset_id, inline=inline)


def parse_node(raw: Any) -> Node:
    """Parse one block node into its variant; unknown tags become UnknownNode."""
    data = _as_dict(raw)
    node_type = data.get("nodeType")
    if not isinstance(node_type, str):
        return UnknownNode(node_type=_text(node_type))
    if node_type not in KNOWN_NODE_TYPES:
        return UnknownNode(node_type=node_type)

    if node_type == "paragraph":
        return Paragraph(spans=parse_spans(data.get("content")))

    if node_type in HEADING_LEVELS:
        return Heading(level=HEADING_LEVELS[node_type], spans=parse_spans(data.get("content")))

    if node_type == "blockquote":
        return Blockquote(spans=parse_spans(data.get("content")))

    if node_type in ("unordered-list", "ordered-list"):
        items = tuple(
            ListItem(spans=parse_spans(item.get("content")))
            for item in _as_sequence(data.get("content"))
            if isinstance(item, dict)
        )
        if node_type == "unordered-list":
            return UnorderedList(items=items)
        return OrderedList(items=items)

    node_data = _as_dict(data.get("data"))

    if node_type == "embedded-asset-block":
        return EmbeddedAssetBlock(target=parse_asset_link(node_data.get("target")))

    if node_type == "embedded-entry-block":
        target = node_data.get("target")
        entry_id = _text(_as_dict(_as_dict(target).get("sys")).get("id")) or None
        return EmbeddedEntryBlock(
            entry_id=entry_id,
            has_target=isinstance(target, dict) or bool(target),
        )

    return UnknownNode(node_type=node_type)


def parse_document(raw: Any) -> RichDocument | None:
    """
    Parse a CMS rich-text field.

    Returns None when the input has no content sequence.
    """
    if isinstance(raw, RichDocument):
        return raw if raw.content is not None else None

    data = _as_dict(raw)
    content = data.get("content")
    if not isinstance(content, (list, tuple)):
        return None

    return RichDocument(content=tuple(parse_node(node) for node in content))


# --- URL Handling ---


def is_safe_url(url: str, config: RichTextConfig = DEFAULT_CONFIG) -> bool:
    """
    Check if URL is safe (no forbidden protocols).

    Whitespace is ignored so `java script:` style obfuscation is caught.
    """
    if not url:
        return True

    compact = _WHITESPACE_PATTERN.sub("", url).lower()
    return not any(compact.startswith(protocol) for protocol in config.forbid_protocols)


def normalize_url(url: Any, config: RichTextConfig = DEFAULT_CONFIG) -> str | None:
    """
    Normalize an asset URL to an absolute https URL.

    - `//host/path` becomes `https://host/path`
    - `host/path` (no scheme) becomes `https://host/path`
    - URLs with a scheme pass through unchanged

    Returns None for empty URLs and forbidden protocols.
    """
    if not isinstance(url, str):
        return None

    candidate = url.strip()
    if not candidate or not is_safe_url(candidate, config):
        return None

    if candidate.startswith("//"):
        return f"https:{candidate}"
    if _SCHEME_PATTERN.match(candidate):
        return candidate
    return f"https://{candidate}"


def resolve_asset(link: AssetLink | None, assets: AssetTable) -> Asset | None:
    """
    Resolve an embedded asset reference.

    Inline fields take precedence; otherwise the id is looked up in the
    asset table. The table is only read.
    """
    if link is None:
        return None
    if link.inline is not None:
        return link.inline
    if link.asset_id:
        return assets.get(link.asset_id)
    return None


# --- HTML Rendering ---


def _open_tag(tag: str, config: RichTextConfig, key: str | None = None) -> str:
    class_name = config.class_names.get(key or tag)
    if class_name:
        return f'<{tag} class="{html.escape(class_name)}">'
    return f"<{tag}>"


def _wrap(tag: str, inner: str, config: RichTextConfig, key: str | None = None) -> str:
    return f"{_open_tag(tag, config, key)}{inner}</{tag}>"


def render_span(span: TextSpan, config: RichTextConfig = DEFAULT_CONFIG) -> str:
    """Render one span, nesting its marks in MARK_ORDER (first = innermost)."""
    text = html.escape(span.value, quote=False)
    for kind in MARK_ORDER:
        if kind in span.marks:
            text = _wrap(MARK_TAGS[kind], text, config)
    return text


def render_spans(
    spans: tuple[TextSpan, ...],
    config: RichTextConfig = DEFAULT_CONFIG,
    apply_marks: bool = True,
) -> str:
    """Concatenate rendered spans in document order."""
    if apply_marks:
        return "".join(render_span(span, config) for span in spans)
    return "".join(html.escape(span.value, quote=False) for span in spans)


def _render_items(items: tuple[ListItem, ...], config: RichTextConfig) -> str:
    # Marks are not applied inside list items.
    return "".join(
        _wrap("li", render_spans(item.spans, config, apply_marks=False), config) for item in items
    )


def _warn(
    warnings: list[RichTextWarning] | None,
    code: str,
    message: str,
    path: str | None,
) -> None:
    logger.debug("Rich text %s at %s: %s", code, path, message)
    if warnings is not None:
        warnings.append(RichTextWarning(code=code, message=message, path=path))


def _render_asset_block(
    node: EmbeddedAssetBlock,
    assets: AssetTable,
    config: RichTextConfig,
    warnings: list[RichTextWarning] | None,
    path: str | None,
) -> str:
    asset = resolve_asset(node.target, assets)
    if asset is None:
        asset_id = node.target.asset_id if node.target else None
        _warn(warnings, "unresolved_asset", f"Asset '{asset_id}' could not be resolved", path)
        return ""

    url = normalize_url(asset.file_url, config)
    if url is None:
        _warn(warnings, "unresolved_asset", f"Asset '{asset.id}' has no usable URL", path)
        return ""

    alt = asset.title or config.default_image_alt
    class_name = config.class_names.get("img")
    class_attr = f' class="{html.escape(class_name)}"' if class_name else ""

    parts = [
        _open_tag("div", config),
        f'<img src="{html.escape(url)}" alt="{html.escape(alt)}"{class_attr}/>',
    ]
    if asset.description:
        parts.append(_wrap("p", html.escape(asset.description, quote=False), config, "caption"))
    parts.append("</div>")
    return "".join(parts)


def _render_entry_placeholder(node: EmbeddedEntryBlock, config: RichTextConfig) -> str:
    if not node.has_target:
        return ""
    label = _wrap("p", html.escape(config.embedded_entry_label, quote=False), config, "placeholder")
    return _wrap("div", label, config)


def render_node(
    node: Node,
    assets: AssetTable,
    config: RichTextConfig = DEFAULT_CONFIG,
    warnings: list[RichTextWarning] | None = None,
    path: str | None = None,
) -> str:
    """Render a single block node; unknown variants contribute nothing."""
    if isinstance(node, Paragraph):
        return _wrap("p", render_spans(node.spans, config), config)

    if isinstance(node, Heading) and node.level in HEADING_LEVELS.values():
        return _wrap(f"h{node.level}", render_spans(node.spans, config), config)

    if isinstance(node, Blockquote):
        return _wrap("blockquote", render_spans(node.spans, config), config)

    if isinstance(node, UnorderedList):
        return _wrap("ul", _render_items(node.items, config), config)

    if isinstance(node, OrderedList):
        return _wrap("ol", _render_items(node.items, config), config)

    if isinstance(node, EmbeddedAssetBlock):
        return _render_asset_block(node, assets, config, warnings, path)

    if isinstance(node, EmbeddedEntryBlock):
        return _render_entry_placeholder(node, config)

    node_type = node.node_type if isinstance(node, UnknownNode) else type(node).__name__
    _warn(warnings, "unknown_node_type", f"Node type '{node_type}' was skipped", path)
    return ""


def render_with_report(
    document: Any,
    includes: Any = None,
    config: RichTextConfig = DEFAULT_CONFIG,
) -> tuple[str, list[RichTextWarning]]:
    """
    Render a document and report what was recovered along the way.

    Returns:
        Tuple of (html, warnings). The html is the fallback paragraph when
        the document is malformed or nothing was rendered.
    """
    warnings: list[RichTextWarning] = []

    parsed = parse_document(document)
    if parsed is None:
        _warn(warnings, "malformed_input", "Document has no content sequence", None)
        return config.fallback_html, warnings

    assets = build_asset_table(includes)
    parts: list[str] = []
    for i, node in enumerate(parsed.content):
        if isinstance(node, dict):
            node = parse_node(node)
        parts.append(render_node(node, assets, config, warnings, f"content[{i}]"))

    output = "".join(parts)
    if not output:
        _warn(warnings, "empty_output", "Document rendered no content", None)
        return config.fallback_html, warnings

    return output, warnings


def render_document(
    document: Any,
    includes: Any = None,
    config: RichTextConfig = DEFAULT_CONFIG,
) -> str:
    """Render a CMS rich-text document to HTML. Never raises."""
    output, _ = render_with_report(document, includes, config)
    return output


# --- Service Class ---


class RichTextRenderer:
    """
    Rich text renderer.

    Shared by every page that shows CMS rich text, so all pages render
    the same node vocabulary the same way.
    """

    def __init__(self, config: RichTextConfig | None = None) -> None:
        """Initialize with optional configuration."""
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> RichTextConfig:
        """Get configuration."""
        return self._config

    def render(self, document: Any, includes: Any = None) -> str:
        """Render document to HTML."""
        return render_document(document, includes, self._config)

    def render_with_report(
        self,
        document: Any,
        includes: Any = None,
    ) -> tuple[str, list[RichTextWarning]]:
        """Render document to HTML and return recovered problems."""
        return render_with_report(document, includes, self._config)

    def resolve_image(self, target: Any, includes: Any = None) -> tuple[Asset | None, str | None]:
        """
        Resolve an asset reference to (asset, normalized url).

        Used for fields outside rich text, such as a featured image.
        """
        asset = resolve_asset(parse_asset_link(target), build_asset_table(includes))
        if asset is None:
            return None, None
        return asset, normalize_url(asset.file_url, self._config)

    def normalize_url(self, url: Any) -> str | None:
        """Normalize an asset URL."""
        return normalize_url(url, self._config)


# --- Factory ---


def create_rich_text_renderer(
    config: RichTextConfig | None = None,
) -> RichTextRenderer:
    """Create a RichTextRenderer with optional configuration."""
    return RichTextRenderer(config=config)
