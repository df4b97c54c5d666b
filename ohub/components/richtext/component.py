"""
Richtext component - CMS rich text to HTML.

Renders rich-text documents and resolves embedded asset references.

Invariants:
- I1: Missing or empty content renders the fallback paragraph
- I2: Unknown node types are skipped, never raised
- I3: Unresolvable assets render no <img>
- I4: Asset URLs are normalized to https
- I5: Mark nesting is independent of input mark order
"""

from __future__ import annotations

from ._impl import (
    RichTextRenderer,
    config_from_rules,
)
from .models import (
    RenderRichTextInput,
    RenderRichTextOutput,
    ResolveAssetInput,
    ResolveAssetOutput,
)
from .ports import RulesPort

# --- Component Entry Points ---


def run_render(
    inp: RenderRichTextInput,
    *,
    rules: RulesPort | None = None,
) -> RenderRichTextOutput:
    """
    Render a rich-text document to HTML.

    Args:
        inp: Input containing the document and optional includes.
        rules: Optional rules port for configuration.

    Returns:
        RenderRichTextOutput with html and recovered warnings.
    """
    renderer = RichTextRenderer(config_from_rules(rules))
    html, warnings = renderer.render_with_report(inp.document, inp.includes)

    return RenderRichTextOutput(
        html=html,
        used_fallback=html == renderer.config.fallback_html,
        warnings=warnings,
        success=True,
    )


def run_resolve_asset(
    inp: ResolveAssetInput,
    *,
    rules: RulesPort | None = None,
) -> ResolveAssetOutput:
    """
    Resolve an asset reference (inline or linked) to an asset and URL.

    Args:
        inp: Input containing the reference and optional includes.
        rules: Optional rules port for configuration.

    Returns:
        ResolveAssetOutput; success is False when nothing resolved.
    """
    renderer = RichTextRenderer(config_from_rules(rules))
    asset, url = renderer.resolve_image(inp.target, inp.includes)

    return ResolveAssetOutput(
        asset=asset,
        url=url,
        success=asset is not None and url is not None,
    )


def run(
    inp: RenderRichTextInput | ResolveAssetInput,
    *,
    rules: RulesPort | None = None,
) -> RenderRichTextOutput | ResolveAssetOutput:
    """
    Main entry point for the richtext component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderRichTextInput):
        return run_render(inp, rules=rules)
    elif isinstance(inp, ResolveAssetInput):
        return run_resolve_asset(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
