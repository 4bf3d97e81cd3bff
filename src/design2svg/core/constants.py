# Logical canvas in SVG user units; every artifact uses a square viewBox.
CANVAS_SIZE = 1000

# The larger logo side is scaled down to this many units, never up.
MAX_LOGO_DIMENSION = 400

# Raster output is drawn at this multiple of the logical canvas.
SUPERSAMPLING_FACTOR = 2

# feColorMatrix saturate value of the engraving filter.
MONOCHROME_SATURATION = 0

DEFAULT_FONT_NAME = "Impact"
FONT_SIZE = "50px"
GENERIC_FONT_FAMILY = "sans-serif"

# Id namespaces of the generated defs.
TEXT_ONLY_NAMESPACE = "text-element"
COMBINED_NAMESPACE = "design-element"
ENGRAVING_NAMESPACE = "engraving-element"

ENGRAVING_TEXT_COLOR = "#000000"
