"""Rules understood by the SVG optimizer.

A rule list is an ordered sequence of built-in rule names and custom
structural rules. The set of custom rules is closed: each variant below is a
small frozen value that the optimizer knows how to apply.
"""

from dataclasses import dataclass
from enum import Enum

from sundrop.constants import (
    DEFAULT_FILL,
    DEFINITION_TAG,
    DIMENSION_ATTRIBUTES,
    ICON_ROOT_TAG,
    SHAPE_ELEMENTS,
)


class BuiltinRule(str, Enum):
    """Generic optimization passes, applied by name."""

    REMOVE_COMMENTS = "remove_comments"
    REMOVE_PROCESSING_INSTRUCTIONS = "remove_processing_instructions"
    REMOVE_METADATA = "remove_metadata"
    REMOVE_EDITORS_NS_DATA = "remove_editors_ns_data"
    REMOVE_DESC = "remove_desc"
    REMOVE_XMLNS = "remove_xmlns"
    REMOVE_DEPRECATED_ATTRS = "remove_deprecated_attrs"
    CLEANUP_ATTRS = "cleanup_attrs"
    CLEANUP_NUMERIC_VALUES = "cleanup_numeric_values"
    CONVERT_COLORS = "convert_colors"
    REMOVE_EMPTY_ATTRS = "remove_empty_attrs"
    REMOVE_EMPTY_TEXT = "remove_empty_text"
    REMOVE_EMPTY_CONTAINERS = "remove_empty_containers"
    SORT_ATTRS = "sort_attrs"


@dataclass(frozen=True)
class RenameElement:
    """Rename every ``source`` element to ``target``.

    With ``skip_root`` the document root keeps its name, so only nested
    elements (the wrapped icons) are renamed.
    """

    source: str = ICON_ROOT_TAG
    target: str = DEFINITION_TAG
    skip_root: bool = True


@dataclass(frozen=True)
class AddDefaultFill:
    """Give shape elements a fill when they specify none.

    Elements with a ``fill`` attribute or a ``fill:`` declaration in their
    inline style are left untouched.
    """

    elements: tuple[str, ...] = SHAPE_ELEMENTS
    fill: str = DEFAULT_FILL


@dataclass(frozen=True)
class StripDimensions:
    """Remove sizing attributes from non-root ``tag`` elements."""

    tag: str = DEFINITION_TAG
    attributes: tuple[str, ...] = DIMENSION_ATTRIBUTES


CustomRule = RenameElement | AddDefaultFill | StripDimensions
Rule = BuiltinRule | CustomRule

# Rules that turn wrapped icons into colorable, resizable <symbol> definitions
SPRITE_RULES: list[Rule] = [
    RenameElement(),
    StripDimensions(),
    AddDefaultFill(),
]

DEFAULT_RULES: list[Rule] = [
    BuiltinRule.REMOVE_PROCESSING_INSTRUCTIONS,
    BuiltinRule.REMOVE_COMMENTS,
    BuiltinRule.REMOVE_METADATA,
    BuiltinRule.REMOVE_EDITORS_NS_DATA,
    BuiltinRule.REMOVE_XMLNS,
    BuiltinRule.REMOVE_DEPRECATED_ATTRS,
    BuiltinRule.CLEANUP_ATTRS,
    BuiltinRule.CLEANUP_NUMERIC_VALUES,
    BuiltinRule.CONVERT_COLORS,
    BuiltinRule.REMOVE_EMPTY_ATTRS,
    BuiltinRule.REMOVE_EMPTY_TEXT,
    BuiltinRule.REMOVE_EMPTY_CONTAINERS,
    BuiltinRule.REMOVE_DESC,
    *SPRITE_RULES,
    BuiltinRule.SORT_ATTRS,
]
