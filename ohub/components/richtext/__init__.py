"""
Richtext component - CMS rich text to HTML.
"""

from ._impl import (
    DEFAULT_CONFIG,
    FALLBACK_HTML,
    RichTextConfig,
    RichTextRenderer,
    build_asset_table,
    config_from_rules,
    create_rich_text_renderer,
    is_safe_url,
    normalize_url,
    parse_asset,
    parse_asset_link,
    parse_document,
    parse_marks,
    parse_node,
    parse_spans,
    render_document,
    render_node,
    render_span,
    render_spans,
    render_with_report,
    resolve_asset,
)
from .component import (
    run,
    run_render,
    run_resolve_asset,
)
from .models import (
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
    RenderRichTextInput,
    RenderRichTextOutput,
    ResolveAssetInput,
    ResolveAssetOutput,
    RichDocument,
    RichTextWarning,
    TextSpan,
    UnknownNode,
    UnorderedList,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_render",
    "run_resolve_asset",
    # Input models
    "RenderRichTextInput",
    "ResolveAssetInput",
    # Output models
    "RenderRichTextOutput",
    "ResolveAssetOutput",
    "RichTextWarning",
    # Ports
    "RulesPort",
    # Document model
    "Asset",
    "AssetLink",
    "AssetTable",
    "Blockquote",
    "EmbeddedAssetBlock",
    "EmbeddedEntryBlock",
    "Heading",
    "ListItem",
    "MarkKind",
    "Node",
    "OrderedList",
    "Paragraph",
    "RichDocument",
    "TextSpan",
    "UnknownNode",
    "UnorderedList",
    # Renderer
    "DEFAULT_CONFIG",
    "FALLBACK_HTML",
    "RichTextConfig",
    "RichTextRenderer",
    "build_asset_table",
    "config_from_rules",
    "create_rich_text_renderer",
    "is_safe_url",
    "normalize_url",
    "parse_asset",
    "parse_asset_link",
    "parse_document",
    "parse_marks",
    "parse_node",
    "parse_spans",
    "render_document",
    "render_node",
    "render_span",
    "render_spans",
    "render_with_report",
    "resolve_asset",
]
