"""Generic SVG optimization passes operating on lxml trees.

Each pass takes the root element and edits the tree in place. Passes compare
local names, so they work whether or not the SVG namespace has been removed.
"""

import re
from collections.abc import Callable, Iterator

from lxml import etree

from sundrop.constants import EDITOR_NAMESPACES, SVG_NAMESPACE, XLINK_NAMESPACE
from sundrop.sprite.rules import BuiltinRule

RulePass = Callable[[etree._Element], None]

NUMERIC_ATTRIBUTES = frozenset(
    {
        "x", "y", "x1", "y1", "x2", "y2", "cx", "cy", "r", "rx", "ry",
        "width", "height", "stroke-width", "stroke-miterlimit", "stroke-dashoffset",
        "opacity", "fill-opacity", "stroke-opacity", "stop-opacity", "font-size",
    }
)
COLOR_ATTRIBUTES = frozenset(
    {"fill", "stroke", "color", "stop-color", "flood-color", "lighting-color"}
)
DEPRECATED_ATTRIBUTES = frozenset(
    {"version", "baseProfile", "contentScriptType", "contentStyleType"}
)
TEXT_ELEMENTS = frozenset({"text", "tspan", "textPath"})
EMPTY_CONTAINERS = frozenset({"g", "defs"})
ATTRIBUTE_ORDER = (
    "id", "width", "height", "x", "x1", "x2", "y", "y1", "y2",
    "cx", "cy", "r", "fill", "stroke", "marker", "d", "points",
)

NUMBER_RE = re.compile(r"^([-+]?)(\d*)(?:\.(\d*))?(px)?$")
RGB_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)
LONG_HEX_RE = re.compile(r"^#([0-9a-f])\1([0-9a-f])\2([0-9a-f])\3$")
VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")


def local_name(node: etree._Element) -> str:
    """Element or attribute name without its namespace."""
    return etree.QName(node).localname


def iter_elements(root: etree._Element) -> Iterator[etree._Element]:
    """Iterate over elements only (no comments or processing instructions), as a snapshot."""
    return iter(list(root.iter(etree.Element)))


def remove_element(element: etree._Element) -> None:
    """Remove an element while keeping its tail text in the document."""
    parent = element.getparent()
    if parent is None:
        return
    if element.tail:
        previous = element.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + element.tail
        else:
            parent.text = (parent.text or "") + element.tail
    parent.remove(element)


def attribute_namespace(name: str) -> str | None:
    return name[1:].split("}", 1)[0] if name.startswith("{") else None


def format_number(value: str) -> str | None:
    """Shorten a plain decimal number; None if value is not one.

    >>> format_number("24.500px")
    '24.5'
    >>> format_number("-0.50")
    '-.5'
    """
    match = NUMBER_RE.match(value.strip())
    if match is None:
        return None

    sign, integer, fraction, _ = match.groups()
    if not integer and not fraction:
        return None

    integer = (integer or "").lstrip("0")
    fraction = (fraction or "").rstrip("0")
    number = f"{integer}.{fraction}" if fraction else integer
    if not number:
        return "0"
    return f"-{number}" if sign == "-" else number


def remove_comments(root: etree._Element) -> None:
    etree.strip_elements(root, etree.Comment, with_tail=False)


def remove_processing_instructions(root: etree._Element) -> None:
    etree.strip_elements(root, etree.ProcessingInstruction, with_tail=False)


def remove_metadata(root: etree._Element) -> None:
    for element in iter_elements(root):
        if element is not root and local_name(element) == "metadata":
            remove_element(element)


def remove_desc(root: etree._Element) -> None:
    for element in iter_elements(root):
        if element is not root and local_name(element) == "desc":
            remove_element(element)


def remove_editors_ns_data(root: etree._Element) -> None:
    """Drop elements and attributes in Inkscape, Sodipodi, Illustrator, Sketch or Figma namespaces."""
    for element in iter_elements(root):
        if element is not root and etree.QName(element).namespace in EDITOR_NAMESPACES:
            remove_element(element)
            continue
        for name in list(element.attrib):
            if attribute_namespace(name) in EDITOR_NAMESPACES:
                del element.attrib[name]
    etree.cleanup_namespaces(root)


def remove_xmlns(root: etree._Element) -> None:
    """Move SVG elements out of the SVG namespace and turn xlink attributes into plain ones.

    The sprite is meant to be inlined into HTML, where the namespace is implied.
    """
    for element in iter_elements(root):
        if etree.QName(element).namespace == SVG_NAMESPACE:
            element.tag = local_name(element)

        for name in list(element.attrib):
            if attribute_namespace(name) != XLINK_NAMESPACE:
                continue
            value = element.attrib.pop(name)
            plain_name = name.split("}", 1)[1]
            if plain_name not in element.attrib:
                element.set(plain_name, value)

    etree.cleanup_namespaces(root)


def remove_deprecated_attrs(root: etree._Element) -> None:
    for element in iter_elements(root):
        for name in DEPRECATED_ATTRIBUTES.intersection(element.attrib):
            del element.attrib[name]


def cleanup_attrs(root: etree._Element) -> None:
    """Collapse whitespace runs inside attribute values."""
    for element in iter_elements(root):
        for name, value in element.attrib.items():
            cleaned = " ".join(value.split())
            if cleaned != value:
                element.set(name, cleaned)


def cleanup_numeric_values(root: etree._Element) -> None:
    for element in iter_elements(root):
        for name, value in element.attrib.items():
            if name == "viewBox":
                parts = [format_number(part) for part in VIEWBOX_SPLIT_RE.split(value.strip())]
                if len(parts) == 4 and all(part is not None for part in parts):
                    element.set(name, " ".join(parts))  # type: ignore[arg-type]
            elif name in NUMERIC_ATTRIBUTES:
                formatted = format_number(value)
                if formatted is not None:
                    element.set(name, formatted)


def convert_color(value: str) -> str:
    """Shorten a color value.

    >>> convert_color("rgb(255, 0, 0)")
    '#f00'
    >>> convert_color("#AABBCC")
    '#abc'
    """
    color = value.strip()
    rgb = RGB_RE.match(color)
    if rgb is not None:
        channels = [min(int(channel), 255) for channel in rgb.groups()]
        color = "#" + "".join(f"{channel:02x}" for channel in channels)

    if not color.startswith("#"):
        return value

    color = color.lower()
    short = LONG_HEX_RE.match(color)
    if short is not None:
        color = "#" + "".join(short.groups())
    return color


def convert_colors(root: etree._Element) -> None:
    for element in iter_elements(root):
        for name in COLOR_ATTRIBUTES.intersection(element.attrib):
            element.set(name, convert_color(element.attrib[name]))


def remove_empty_attrs(root: etree._Element) -> None:
    for element in iter_elements(root):
        for name, value in list(element.attrib.items()):
            if not value.strip():
                del element.attrib[name]


def remove_empty_text(root: etree._Element) -> None:
    for element in iter_elements(root):
        if local_name(element) not in TEXT_ELEMENTS:
            continue
        if len(element) == 0 and not (element.text or "").strip():
            remove_element(element)


def remove_empty_containers(root: etree._Element) -> None:
    # Children before parents so nested empty groups collapse in one pass
    for element in reversed(list(root.iter(etree.Element))):
        if element is root or local_name(element) not in EMPTY_CONTAINERS:
            continue
        if len(element) == 0 and not (element.text or "").strip():
            remove_element(element)


def _attribute_sort_key(name: str) -> tuple[int, str]:
    plain = name.split("}", 1)[-1]
    try:
        return ATTRIBUTE_ORDER.index(plain), plain
    except ValueError:
        return len(ATTRIBUTE_ORDER), plain


def sort_attrs(root: etree._Element) -> None:
    """Order attributes: id and geometry first, then alphabetically."""
    for element in iter_elements(root):
        items = sorted(element.attrib.items(), key=lambda item: _attribute_sort_key(item[0]))
        if items == list(element.attrib.items()):
            continue
        element.attrib.clear()
        for name, value in items:
            element.set(name, value)


BUILTIN_RULES: dict[BuiltinRule, RulePass] = {
    BuiltinRule.REMOVE_COMMENTS: remove_comments,
    BuiltinRule.REMOVE_PROCESSING_INSTRUCTIONS: remove_processing_instructions,
    BuiltinRule.REMOVE_METADATA: remove_metadata,
    BuiltinRule.REMOVE_EDITORS_NS_DATA: remove_editors_ns_data,
    BuiltinRule.REMOVE_DESC: remove_desc,
    BuiltinRule.REMOVE_XMLNS: remove_xmlns,
    BuiltinRule.REMOVE_DEPRECATED_ATTRS: remove_deprecated_attrs,
    BuiltinRule.CLEANUP_ATTRS: cleanup_attrs,
    BuiltinRule.CLEANUP_NUMERIC_VALUES: cleanup_numeric_values,
    BuiltinRule.CONVERT_COLORS: convert_colors,
    BuiltinRule.REMOVE_EMPTY_ATTRS: remove_empty_attrs,
    BuiltinRule.REMOVE_EMPTY_TEXT: remove_empty_text,
    BuiltinRule.REMOVE_EMPTY_CONTAINERS: remove_empty_containers,
    BuiltinRule.SORT_ATTRS: sort_attrs,
}
