"""Application-wide constants for the sundrop sprite bundler.

This module centralizes the values shared between the icon search engine and
the sprite generator so both halves agree on what an icon file is, what counts
as an identifier, and how the final document is wrapped.

Constants are grouped into the following categories:
- Icon Index Constants: file extension and dependency directory lookups
- Scanner Constants: default glob, tokenizer alphabet and read batching
- Sprite Constants: id prefix, shape elements and the document template
- Configuration Constants: config file names and logging sizes
"""

# Icon index constants
ICON_FILE_EXTENSION = ".svg"  # Only files ending in this suffix are indexed
NODE_MODULES_DIR = "node_modules"  # Conventional dependency directory for package lookups
SCOPED_PACKAGE_MARKER = "@"  # Leading character of scoped identifiers (@scope/name)

# Scanner constants
DEFAULT_SEARCH_PATTERN = "./**/*.{html,css}"  # Files scanned for icon references
TOKEN_SEPARATOR_PATTERN = r"[^a-zA-Z0-9_:-]+"  # Anything outside the identifier alphabet splits tokens
FILE_READ_BATCH_SIZE = 50  # Files read concurrently per batch while scanning

# Sprite constants
DEFAULT_ID_PREFIX = "icon-"  # Prefix applied to output ids by the command line
ICON_ROOT_TAG = "svg"  # Root container of each icon and of the sprite sheet
DEFINITION_TAG = "symbol"  # Reusable, non-rendered definition element
DEFAULT_FILL = "currentColor"  # Injected fill so icons can be colored from CSS
SHAPE_ELEMENTS = ("path", "ellipse", "rect", "circle")  # Elements that receive the default fill
DIMENSION_ATTRIBUTES = ("width", "height")  # Stripped from definitions so <use> controls size
SPRITE_TEMPLATE = '<svg width="0" height="0" style="position:absolute">{symbols}</svg>'

# XML namespaces
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
EDITOR_NAMESPACES = (
    "http://www.inkscape.org/namespaces/inkscape",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://ns.adobe.com/AdobeIllustrator/10.0/",
    "http://ns.adobe.com/Graphs/1.0/",
    "http://ns.adobe.com/AdobeSVGViewerExtensions/3.0/",
    "http://ns.adobe.com/Variables/1.0/",
    "http://ns.adobe.com/SaveForWeb/1.0/",
    "http://ns.adobe.com/Extensibility/1.0/",
    "http://ns.adobe.com/Flows/1.0/",
    "http://ns.adobe.com/ImageReplacement/1.0/",
    "http://ns.adobe.com/GenericCustomNamespace/1.0/",
    "http://ns.adobe.com/XPath/1.0/",
    "http://www.bohemiancoding.com/sketch/ns",
    "http://www.figma.com/figma/ns",
)

# Configuration constants
DEFAULT_CONFIG_FILENAMES = ("sundrop.yaml", "sundrop.yml", "sundrop.json")  # Searched in cwd
BYTES_PER_MEGABYTE = 1024 * 1024  # Used for log rotation sizes
