"""
Yomichan term-bank data structures.

A term bank is a JSON array of 8-field rows:
    [term, reading, definitionTag, inflectionRule, frequency,
     definitions, sequence, tag]

Definitions are rich content trees (strings, arrays and tagged nodes). They
are parsed into a closed set of dataclasses: Text, ContentList, Element and
Image.
"""

import json
import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from yomichan_kindle.inflections import unknown_inflection_tags

logger = logging.getLogger(__name__)


# ============================================================================
# Errors
# ============================================================================

class InvalidEntryError(ValueError):
    """A term-bank row could not be turned into a DictionaryEntry."""


class UnknownInflectionClassError(InvalidEntryError):
    """An inflection-class tag is outside the supported enumeration."""

    def __init__(self, term: str, tags: List[str]):
        self.term = term
        self.tags = tags
        super().__init__(f"Unknown inflection class {' '.join(tags)!r} for {term!r}")


# ============================================================================
# Rich Content
# ============================================================================

@dataclass(slots=True)
class Text:
    """Plain text; newlines become line breaks."""
    text: str


@dataclass(slots=True)
class ContentList:
    """A sequence of content items."""
    items: List['Content'] = field(default_factory=list)


@dataclass(slots=True)
class Element:
    """
    A markup element.

    Attributes:
        tag: Element name (span, div, ruby, br, table...)
        style: Yomichan style properties in camelCase
        attributes: Attributes copied verbatim to the output element
        content: Child content, if any
    """
    tag: str
    style: Dict[str, Any] = field(default_factory=dict)
    attributes: Dict[str, str] = field(default_factory=dict)
    content: Optional['Content'] = None


@dataclass(slots=True)
class Image:
    """
    An image referencing a file inside the dictionary archive.

    `standalone` marks a top-level image definition, rendered with its
    description below it.
    """
    path: str
    width: Optional[float] = None
    height: Optional[float] = None
    title: Optional[str] = None
    description: Optional[str] = None
    size_units: Optional[str] = None
    image_rendering: Optional[str] = None
    pixelated: bool = False
    vertical_align: Optional[str] = None
    standalone: bool = False


Content = Union[Text, ContentList, Element, Image]

# Keys of a tagged node that are not copied as attributes
RESERVED_KEYS = frozenset(['tag', 'style', 'content'])

# Image node keys mapped to Image fields
IMAGE_KEYS = {
    'path': 'path',
    'width': 'width',
    'height': 'height',
    'title': 'title',
    'description': 'description',
    'sizeUnits': 'size_units',
    'imageRendering': 'image_rendering',
    'pixelated': 'pixelated',
    'verticalAlign': 'vertical_align',
}


def _attribute_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _attributes(node: Dict[str, Any]) -> Dict[str, str]:
    attributes = {}
    for key, value in node.items():
        if key in RESERVED_KEYS or value is None:
            continue
        if key == 'data' and isinstance(value, dict):
            for data_key, data_value in value.items():
                attributes[f"data-{data_key}"] = _attribute_value(data_value)
        else:
            attributes[key] = _attribute_value(value)
    return attributes


def _image(node: Dict[str, Any], standalone: bool = False) -> Image:
    if not isinstance(node.get('path'), str):
        raise InvalidEntryError(f"Image without path: {node!r}")
    kwargs = {name: node[key] for key, name in IMAGE_KEYS.items() if key in node}
    kwargs['pixelated'] = bool(kwargs.get('pixelated', False))
    return Image(standalone=standalone, **kwargs)


def parse_content(node: Any) -> Content:
    """
    Parse a structured-content node.

    Raises:
        InvalidEntryError: If the node is not a string, list or tagged object
    """
    if isinstance(node, str):
        return Text(node)
    if isinstance(node, list):
        return ContentList([parse_content(item) for item in node])
    if isinstance(node, dict) and 'tag' in node:
        if node['tag'] == 'img' and 'path' in node:
            return _image(node)
        content = node.get('content')
        return Element(
            tag=node['tag'],
            style=dict(node.get('style') or {}),
            attributes=_attributes(node),
            content=parse_content(content) if content is not None else None,
        )
    raise InvalidEntryError(f"Unsupported content node: {node!r}")


def parse_definition(definition: Any) -> Content:
    """
    Parse one item of the definitions column.

    Handles plain strings and the typed forms `text`, `image` and
    `structured-content`.
    """
    if isinstance(definition, dict) and 'type' in definition:
        kind = definition['type']
        if kind == 'text':
            return Text(definition.get('text', ''))
        if kind == 'image':
            return _image(definition, standalone=True)
        if kind == 'structured-content':
            return parse_content(definition.get('content', ''))
        raise InvalidEntryError(f"Unsupported definition type: {kind!r}")
    return parse_content(definition)


def iter_images(content: Content):
    """Yield every Image in a content tree, depth first."""
    if isinstance(content, Image):
        yield content
    elif isinstance(content, ContentList):
        for item in content.items:
            yield from iter_images(item)
    elif isinstance(content, Element) and content.content is not None:
        yield from iter_images(content.content)


# ============================================================================
# Dictionary Entries
# ============================================================================

@dataclass
class DictionaryEntry:
    """
    One row of a Yomichan term bank.

    Attributes:
        term: Headword as written
        reading: Reading in kana (may be empty)
        inflection_class: Space-separated inflection-class tags (may be empty)
        frequency: Popularity score, higher is more common
        definitions: Parsed definition content
        sequence: Identity shared by alternate writings of one entry
        definition_tag: Definition tags column
        tag: Term tags column
    """
    term: str
    reading: str = ""
    inflection_class: str = ""
    frequency: float = 0
    definitions: List[Content] = field(default_factory=list)
    sequence: int = 0
    definition_tag: Optional[str] = None
    tag: str = ""

    def with_term(self, term: str) -> 'DictionaryEntry':
        """Copy of this entry under another headword."""
        return replace(self, term=term)


def entry_from_row(row: Any, validate_inflections: bool = True) -> DictionaryEntry:
    """
    Build a DictionaryEntry from a term-bank row.

    Raises:
        InvalidEntryError: If the row is not an 8-field array
        UnknownInflectionClassError: If an inflection tag is not supported
    """
    if not isinstance(row, list) or len(row) != 8:
        raise InvalidEntryError(f"Expected an 8-field term-bank row, got {row!r}")

    term, reading, definition_tag, rules, frequency, definitions, sequence, tag = row

    if not isinstance(term, str) or not term:
        raise InvalidEntryError(f"Missing term in row {row!r}")
    if not isinstance(definitions, list):
        raise InvalidEntryError(f"Definitions of {term!r} must be a list")

    rules = rules or ""
    if validate_inflections:
        unknown = unknown_inflection_tags(rules)
        if unknown:
            raise UnknownInflectionClassError(term, unknown)

    return DictionaryEntry(
        term=term,
        reading=reading or "",
        inflection_class=rules,
        frequency=frequency or 0,
        definitions=[parse_definition(d) for d in definitions],
        sequence=sequence or 0,
        definition_tag=definition_tag,
        tag=tag or "",
    )


# ============================================================================
# Term Bank Loading
# ============================================================================

def _natural_key(name: str):
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r'(\d+)', name)]


def find_term_banks(path: Path) -> List[Path]:
    """Get the term_bank files of a dictionary directory in natural order."""
    files = [p for p in path.iterdir() if p.is_file() and p.name.startswith('term_bank')]
    return sorted(files, key=lambda p: _natural_key(p.name))


def load_term_banks(path: Path, strict: bool = True) -> List[DictionaryEntry]:
    """
    Load every term bank of an unpacked Yomichan dictionary.

    Args:
        path: Dictionary directory
        strict: Raise on invalid rows. Otherwise they are logged and skipped.

    Returns:
        Entries in file and row order

    Raises:
        FileNotFoundError: If the directory or its term banks are missing
        InvalidEntryError: If a row is invalid and `strict` is set
    """
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError(f"Dictionary directory not found: {path}")

    files = find_term_banks(path)
    if not files:
        raise FileNotFoundError(f"No term_bank files found in {path}")

    entries: List[DictionaryEntry] = []
    skipped = 0

    for file in files:
        with open(file, 'r', encoding='utf-8') as f:
            rows = json.load(f)

        for index, row in enumerate(rows):
            try:
                entries.append(entry_from_row(row))
            except InvalidEntryError as e:
                if strict:
                    raise InvalidEntryError(f"{file.name}[{index}]: {e}") from e
                logger.warning(f"Skipping {file.name}[{index}]: {e}")
                skipped += 1

        logger.debug(f"Loaded {file.name}")

    logger.info(f"Loaded {len(entries)} entries from {len(files)} term banks")
    if skipped:
        logger.warning(f"Skipped {skipped} invalid entries")

    return entries
