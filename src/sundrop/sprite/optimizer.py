"""SVG optimizer applying an ordered list of rules to an lxml tree."""

import logging
import re
from collections.abc import Sequence

from lxml import etree

from sundrop.exceptions import SvgOptimizationError, chain_exception
from sundrop.sprite.builtin_rules import BUILTIN_RULES, TEXT_ELEMENTS, iter_elements, local_name
from sundrop.sprite.rules import (
    DEFAULT_RULES,
    AddDefaultFill,
    BuiltinRule,
    RenameElement,
    Rule,
    StripDimensions,
)

logger = logging.getLogger(__name__)

STYLE_FILL_RE = re.compile(r"(?:^|;)\s*fill\s*:")


def make_parser() -> etree.XMLParser:
    """Parser for icon and sprite markup; parsers are not shared between threads."""
    return etree.XMLParser(no_network=True, remove_comments=False)


def parse_markup(markup: str) -> etree._Element:
    """Parse SVG markup into its root element.

    Raises:
        etree.XMLSyntaxError: If the markup is not well-formed.
    """
    return etree.fromstring(markup.encode("utf-8"), make_parser())


def rename_element(root: etree._Element, rule: RenameElement) -> None:
    for element in iter_elements(root):
        if rule.skip_root and element is root:
            continue
        if local_name(element) == rule.source:
            namespace = etree.QName(element).namespace
            element.tag = etree.QName(namespace, rule.target).text if namespace else rule.target


def add_default_fill(root: etree._Element, rule: AddDefaultFill) -> None:
    for element in iter_elements(root):
        if local_name(element) not in rule.elements:
            continue
        if "fill" in element.attrib or STYLE_FILL_RE.search(element.get("style", "")):
            continue
        element.set("fill", rule.fill)


def strip_dimensions(root: etree._Element, rule: StripDimensions) -> None:
    for element in iter_elements(root):
        if element is root or local_name(element) != rule.tag:
            continue
        for name in rule.attributes:
            element.attrib.pop(name, None)


def strip_whitespace(root: etree._Element) -> None:
    """Drop whitespace-only text nodes outside text content."""
    for element in root.iter():
        parent = element.getparent()
        if isinstance(element.tag, str) and local_name(element) not in TEXT_ELEMENTS:
            if element.text is not None and not element.text.strip():
                element.text = None
        in_text = (
            parent is not None
            and isinstance(parent.tag, str)
            and local_name(parent) in TEXT_ELEMENTS
        )
        if element.tail is not None and not element.tail.strip() and not in_text:
            element.tail = None


class SvgOptimizer:
    """Applies built-in and custom rules, in order, and serializes minified markup.

    Attributes:
        rules: The ordered rule list
    """

    def __init__(self, rules: Sequence[Rule | str] | None = None) -> None:
        """Initialize the optimizer.

        Args:
            rules: Rules to apply; built-in rules may be given by name.
                Defaults to DEFAULT_RULES.

        Raises:
            ValueError: If a rule name is not a known built-in rule.
        """
        self.rules: list[Rule] = [
            BuiltinRule(rule) if isinstance(rule, str) else rule
            for rule in (DEFAULT_RULES if rules is None else rules)
        ]

    def apply(self, root: etree._Element) -> etree._Element:
        """Apply every rule to the tree in place.

        Args:
            root: Root element of the document

        Returns:
            The same root element.
        """
        for rule in self.rules:
            if isinstance(rule, BuiltinRule):
                BUILTIN_RULES[rule](root)
            elif isinstance(rule, RenameElement):
                rename_element(root, rule)
            elif isinstance(rule, AddDefaultFill):
                add_default_fill(root, rule)
            elif isinstance(rule, StripDimensions):
                strip_dimensions(root, rule)
            else:
                raise TypeError(f"Unsupported optimizer rule: {rule!r}")
        return root

    def serialize(self, root: etree._Element) -> str:
        """Serialize without XML declaration, doctype or insignificant whitespace."""
        strip_whitespace(root)
        return etree.tostring(root, encoding="unicode")

    def optimize(self, markup: str) -> str:
        """Parse, optimize and serialize SVG markup.

        Args:
            markup: SVG document text

        Returns:
            The optimized markup.

        Raises:
            SvgOptimizationError: If the markup cannot be parsed.
        """
        try:
            root = parse_markup(markup)
        except etree.XMLSyntaxError as e:
            raise chain_exception(
                SvgOptimizationError("Failed to parse SVG markup", {"error": str(e)}), e
            )

        optimized = self.serialize(self.apply(root))
        logger.debug(f"Optimized SVG from {len(markup)} to {len(optimized)} characters")
        return optimized
