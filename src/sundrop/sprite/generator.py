"""Sprite sheet generation from matched icon files.

Rendering happens in three steps:
1. Every matched icon is loaded and its root ``<svg>`` gets the output id
   (``id_prefix + name``, unless the name already starts with one of the
   configured prefixes)
   as its first attribute.
2. The fragments are joined in match order and wrapped in a zero-size,
   absolutely positioned ``<svg>`` so the sheet takes no layout space.
3. The optimizer turns each nested ``<svg>`` into a ``<symbol>``, strips its
   size, adds ``fill="currentColor"`` to unfilled shapes, and minifies.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from lxml import etree

from sundrop.constants import DEFAULT_ID_PREFIX, ICON_ROOT_TAG, SPRITE_TEMPLATE
from sundrop.exceptions import IconFileUnreadableError, OutputIdCollisionError, chain_exception
from sundrop.models.results import SpriteFragment
from sundrop.sprite.builtin_rules import local_name
from sundrop.sprite.optimizer import SvgOptimizer, parse_markup
from sundrop.utils import file_utils

logger = logging.getLogger(__name__)


def default_sprite_template(symbols: str) -> str:
    """Wrap concatenated icon markup in the invisible sprite root."""
    return SPRITE_TEMPLATE.format(symbols=symbols)


def output_id(name: str, id_prefix: str, id_prefixes: Iterable[str] = ()) -> str:
    """Id of a matched icon in the sprite sheet.

    Names that already carry id_prefix or any of id_prefixes (matched through
    a prefixed registration such as ``icon-close`` or ``i-close``) are kept
    as they are, so the id stays the one the project references.

    >>> output_id("arrow", "icon-")
    'icon-arrow'
    >>> output_id("icon-close", "icon-")
    'icon-close'
    >>> output_id("i-close", "icon-", ["icon-", "i-"])
    'i-close'
    """
    if name.startswith(id_prefix) or any(name.startswith(p) for p in id_prefixes if p):
        return name
    return f"{id_prefix}{name}"


def inject_id(root: etree._Element, icon_id: str) -> None:
    """Make icon_id the first attribute of root, replacing any existing id."""
    attributes = [(name, value) for name, value in root.attrib.items() if name != "id"]
    root.attrib.clear()
    root.set("id", icon_id)
    for name, value in attributes:
        root.set(name, value)


def load_fragment(
    name: str, path: Path, id_prefix: str, id_prefixes: Iterable[str] = ()
) -> SpriteFragment:
    """Load an icon file and prepare it for merging.

    Args:
        name: Matched icon name
        path: Icon file
        id_prefix: Prefix for the output id
        id_prefixes: Other registered prefixes a matched name may already carry

    Returns:
        The icon's sprite fragment.

    Raises:
        IconFileUnreadableError: If the file cannot be read, is not well-formed
            XML, or its root element is not an ``<svg>``.
    """
    try:
        markup = file_utils.read_text(path)
        root = parse_markup(markup)
    except (OSError, UnicodeDecodeError, etree.XMLSyntaxError) as e:
        raise chain_exception(
            IconFileUnreadableError(
                f"Icon file unreadable: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        )

    if local_name(root) != ICON_ROOT_TAG:
        raise IconFileUnreadableError(
            f"Icon file unreadable: {path}",
            {"path": str(path), "error": f"root element is <{local_name(root)}>, not <svg>"},
        )

    icon_id = output_id(name, id_prefix, id_prefixes)
    inject_id(root, icon_id)
    return SpriteFragment(
        output_id=icon_id,
        raw_markup=etree.tostring(root, encoding="unicode"),
        source=path,
    )


class SpriteGenerator:
    """Merges matched icons into one optimized sprite sheet.

    Attributes:
        input_files: Matched icon name -> icon file, in output order
        id_prefix: Prefix for every output id
        id_prefixes: Registered prefixes; names starting with one keep their id
        optimizer: Optimizer applied to the wrapped document
        sprite_template: Callable wrapping the concatenated fragments
    """

    def __init__(
        self,
        input_files: Mapping[str, Path] | Iterable[tuple[str, Path]],
        id_prefix: str = DEFAULT_ID_PREFIX,
        id_prefixes: Iterable[str] = (),
        optimizer: SvgOptimizer | None = None,
        sprite_template: Callable[[str], str] = default_sprite_template,
    ) -> None:
        items = input_files.items() if isinstance(input_files, Mapping) else input_files
        self.input_files: list[tuple[str, Path]] = list(items)
        self.id_prefix = id_prefix
        self.id_prefixes = tuple(id_prefixes)
        self.optimizer = optimizer or SvgOptimizer()
        self.sprite_template = sprite_template

    async def load_fragments(self) -> list[SpriteFragment]:
        """Load all icons concurrently, keeping input order.

        Raises:
            IconFileUnreadableError: If any icon cannot be loaded.
            OutputIdCollisionError: If two icons map to the same output id.
        """
        fragments = await asyncio.gather(
            *(
                asyncio.to_thread(load_fragment, name, path, self.id_prefix, self.id_prefixes)
                for name, path in self.input_files
            )
        )

        sources: dict[str, Path] = {}
        for fragment in fragments:
            previous = sources.get(fragment.output_id)
            if previous is not None:
                raise OutputIdCollisionError(
                    f"Duplicate sprite id: {fragment.output_id}",
                    {"id": fragment.output_id, "paths": [str(previous), str(fragment.source)]},
                )
            sources[fragment.output_id] = fragment.source

        return list(fragments)

    async def concatenate_svgs(self) -> str:
        """Join the icon fragments in input order."""
        fragments = await self.load_fragments()
        return "".join(fragment.raw_markup for fragment in fragments)

    async def render(self) -> bytes:
        """Render the complete sprite sheet.

        Returns:
            The optimized sprite document as UTF-8 bytes.
        """
        document = self.sprite_template(await self.concatenate_svgs())
        sprite = await asyncio.to_thread(self.optimizer.optimize, document)
        return sprite.encode("utf-8")
