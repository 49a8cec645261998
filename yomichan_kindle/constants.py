"""
Shared constants for yomichan-kindle.
"""

# ============================================================================
# Output Layout
# ============================================================================

# Kindle entries per generated XHTML file
ENTRIES_PER_FILE = 10000

# Images converted concurrently per batch
IMAGE_BATCH_SIZE = 30

DEFAULT_IMAGE_QUALITY = 75

# Directory (relative to the output) holding converted images
IMAGE_OUTPUT_DIR = "i"

# Lookup index file written next to the OPF
LOOKUP_INDEX_FILENAME = "lookup.marisa"

# Lookup index name referenced by DefaultLookupIndex
LOOKUP_INDEX_NAME = "j"

DICTIONARY_LANGUAGE = "ja"

# Separator between merged headwords in the bold label
HEADWORD_SEPARATOR = "、"


# ============================================================================
# Namespaces
# ============================================================================

KINDLE_NS = "https://kindlegen.s3.amazonaws.com/AmazonKindlePublishingGuidelines.pdf"
OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"

HTML_NAMESPACES = {
    "math": "http://exslt.org/math",
    "svg": "http://www.w3.org/2000/svg",
    "tl": KINDLE_NS,
    "saxon": "http://saxon.sf.net/",
    "xs": "http://www.w3.org/2001/XMLSchema",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "cx": KINDLE_NS,
    "dc": DC_NS,
    "mbp": KINDLE_NS,
    "mmc": KINDLE_NS,
    "idx": KINDLE_NS,
}
