"""
Richtext component models.

Typed rich-text document tree (one variant per CMS node type),
referenced assets, and the component input/output models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# --- Marks ---


class MarkKind(str, Enum):
    """Inline text decorations supported by the renderer."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    CODE = "code"


# Nesting order: first entry is wrapped first (innermost).
MARK_ORDER: tuple[MarkKind, ...] = (
    MarkKind.BOLD,
    MarkKind.ITALIC,
    MarkKind.UNDERLINE,
    MarkKind.CODE,
)

MARK_TAGS: dict[MarkKind, str] = {
    MarkKind.BOLD: "strong",
    MarkKind.ITALIC: "em",
    MarkKind.UNDERLINE: "u",
    MarkKind.CODE: "code",
}


@dataclass(frozen=True)
class TextSpan:
    """A run of text with an unordered set of marks."""

    value: str
    marks: frozenset[MarkKind] = field(default_factory=frozenset)


# --- Assets ---


@dataclass(frozen=True)
class Asset:
    """CMS media object, owned by the response's includes table."""

    id: str
    title: str = ""
    file_url: str = ""
    description: str | None = None
    width: int | None = None
    height: int | None = None


AssetTable = Mapping[str, Asset]


@dataclass(frozen=True)
class AssetLink:
    """
    Target of an embedded asset block.

    Either carries the asset inline (`inline`) or only its id, to be
    looked up in the asset table.
    """

    asset_id: str | None = None
    inline: Asset | None = None


# --- Node Variants ---


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[TextSpan, ...] = ()


@dataclass(frozen=True)
class Heading:
    level: int
    spans: tuple[TextSpan, ...] = ()


@dataclass(frozen=True)
class Blockquote:
    spans: tuple[TextSpan, ...] = ()


@dataclass(frozen=True)
class ListItem:
    spans: tuple[TextSpan, ...] = ()


@dataclass(frozen=True)
class UnorderedList:
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class OrderedList:
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class EmbeddedAssetBlock:
    target: AssetLink | None = None


@dataclass(frozen=True)
class EmbeddedEntryBlock:
    """Embedded entry; rendered as a placeholder, never resolved."""

    entry_id: str | None = None
    has_target: bool = False


@dataclass(frozen=True)
class UnknownNode:
    """Any node whose type tag is not in the recognized set."""

    node_type: str = ""


Node = (
    Paragraph
    | Heading
    | Blockquote
    | UnorderedList
    | OrderedList
    | EmbeddedAssetBlock
    | EmbeddedEntryBlock
    | UnknownNode
)


@dataclass(frozen=True)
class RichDocument:
    """Root of one CMS rich-text field, nodes in document order."""

    content: tuple[Node, ...] = ()


# --- Warnings ---


@dataclass(frozen=True)
class RichTextWarning:
    """A problem the renderer recovered from."""

    code: str
    message: str
    path: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderRichTextInput:
    """Input for rendering a rich-text document to HTML."""

    document: Any
    includes: Any = None


# --- Output Models ---


@dataclass(frozen=True)
class RenderRichTextOutput:
    """Rendered HTML plus the recoveries made while rendering."""

    html: str
    used_fallback: bool = False
    warnings: list[RichTextWarning] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ResolveAssetInput:
    """Input for resolving an asset reference against an includes table."""

    target: Any
    includes: Any = None


@dataclass(frozen=True)
class ResolveAssetOutput:
    """Resolved asset with its normalized URL, if any."""

    asset: Asset | None
    url: str | None = None
    success: bool = True

