"""Conformance checks for document layouts.

Reports what the layout transform would change without mutating the tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from frontmatter_layout.exceptions import FrontmatterError
from frontmatter_layout.frontmatter import LAYOUT_KEY, has_layout, load_metadata, locate_frontmatter
from frontmatter_layout.plugin import is_excluded

if TYPE_CHECKING:
    from frontmatter_layout.types import DocumentTree, LayoutConfig


def validate_document(
    tree: DocumentTree,
    config: LayoutConfig,
    source: str | None = None,
) -> list[str]:
    """Check that *tree* already declares the layout *config* asks for.

    Returns a list of error messages. An empty list means valid.
    """
    errors: list[str] = []
    name = source or "document"

    if is_excluded(source, config):
        return errors

    node = locate_frontmatter(tree)
    if node is None:
        errors.append(f"{name} has no frontmatter")
        return errors

    try:
        metadata = load_metadata(node.value, source)
    except FrontmatterError as exc:
        errors.append(str(exc))
        return errors

    layout = metadata.get(LAYOUT_KEY)
    if not has_layout(metadata):
        errors.append(f"{name} does not declare '{LAYOUT_KEY}'")
    elif not config.skip_if_has_layout and layout != config.default_layout:
        errors.append(
            f"{name} declares layout '{layout}', expected '{config.default_layout}'"
        )

    return errors
