"""Sprite sheet generation and SVG optimization."""

from sundrop.sprite.generator import (
    SpriteGenerator,
    default_sprite_template,
    load_fragment,
    output_id,
)
from sundrop.sprite.optimizer import SvgOptimizer
from sundrop.sprite.rules import (
    DEFAULT_RULES,
    SPRITE_RULES,
    AddDefaultFill,
    BuiltinRule,
    CustomRule,
    RenameElement,
    Rule,
    StripDimensions,
)

__all__ = [
    "DEFAULT_RULES",
    "SPRITE_RULES",
    "AddDefaultFill",
    "BuiltinRule",
    "CustomRule",
    "RenameElement",
    "Rule",
    "SpriteGenerator",
    "StripDimensions",
    "SvgOptimizer",
    "default_sprite_template",
    "load_fragment",
    "output_id",
]
