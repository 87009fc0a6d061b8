"""Document tree nodes and layout configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LAYOUT = "src/layout/layout.astro"


@dataclass
class FrontmatterNode:
    """YAML frontmatter block, always the first child of a tree.

    ``value`` holds the raw YAML text between the ``---`` fences.
    ``trailing`` is the whitespace that followed the closing fence.
    ``newline`` is the line ending used inside the block.
    """

    value: str = ""
    trailing: str = "\n"
    newline: str = "\n"


@dataclass
class BlockNode:
    """Any other top-level markdown block, carried verbatim."""

    value: str
    trailing: str = ""


Node = FrontmatterNode | BlockNode


@dataclass
class DocumentTree:
    """Ordered top-level blocks of a single parsed document.

    ``bom`` records a leading byte order mark, kept outside every node.
    """

    children: list[Node] = field(default_factory=list)
    bom: bool = False


class LayoutConfig(BaseModel):
    """Options for the layout transform.

    Accepts the camelCase option names used in build configs::

        LayoutConfig.model_validate({"defaultLayout": "@/layout/post.astro"})
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    default_layout: str = Field(default=DEFAULT_LAYOUT, alias="defaultLayout")
    skip_if_has_layout: bool = Field(default=True, alias="skipIfHasLayout")
    exclude: tuple[str, ...] = Field(
        default=(),
        description="Source path prefixes for which no layout is injected",
    )

    @field_validator("default_layout")
    @classmethod
    def _require_layout(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("default_layout must be a non-empty string")
        return value
