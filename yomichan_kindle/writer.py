"""
Kindle dictionary source files.

Writes merged entries as XHTML files of <idx:entry> elements plus the OPF
package manifest that kindlegen / Kindle Previewer compile.

Entry bodies are built with lxml. The <mbp:frameset>/<idx:*> shell is
written as text: the Kindle prefixes all share one namespace URI, and
kindlegen matches them literally.
"""

import html
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from lxml import etree

from yomichan_kindle.constants import (
    DC_NS,
    DICTIONARY_LANGUAGE,
    ENTRIES_PER_FILE,
    HEADWORD_SEPARATOR,
    HTML_NAMESPACES,
    LOOKUP_INDEX_NAME,
    OPF_NS,
)
from yomichan_kindle.entry import KindleEntry

logger = logging.getLogger(__name__)

# Keycap digits most Kindle fonts cannot display
CUSTOM_REPLACEMENTS = {
    '1️⃣': '<b>[一]</b>',
    '2️⃣': '<b>[二]</b>',
    '3️⃣': '<b>[三]</b>',
    '4️⃣': '<b>[四]</b>',
    '5️⃣': '<b>[五]</b>',
    '6️⃣': '<b>[六]</b>',
}


def custom_replacements(markup: str) -> str:
    """Replace characters Kindle cannot render."""
    for source, target in CUSTOM_REPLACEMENTS.items():
        markup = markup.replace(source, target)
    return markup


def _attr(value: str) -> str:
    return html.escape(value, quote=True)


# ============================================================================
# XHTML
# ============================================================================

def entry_to_xhtml(entry: KindleEntry, pretty: bool = False) -> str:
    """Render one <idx:entry> element."""
    newline = '\n' if pretty else ''
    parts = [f'<idx:entry name="{LOOKUP_INDEX_NAME}" scriptable="yes">', '<idx:short>']

    # Inflections are listed as orths rather than <idx:infl>, which does not
    # deinflect Japanese forms
    for form in entry.forms:
        parts.append(f'<idx:orth value="{_attr(form)}"/>')

    if entry.bold_headword:
        headwords = list(dict.fromkeys(entry.headwords))
        parts.append(f'<b>{html.escape(HEADWORD_SEPARATOR.join(headwords), quote=False)}</b>')

    body = etree.tostring(entry.body, encoding='unicode', pretty_print=pretty)
    parts.append(body.rstrip('\n'))
    parts.append('</idx:short>')
    parts.append('</idx:entry>')
    return newline.join(parts)


def entries_to_xhtml(entries: Iterable[KindleEntry], pretty: bool = False) -> str:
    """Render a complete XHTML document holding `entries`."""
    newline = '\n' if pretty else ''
    namespaces = ' '.join(f'xmlns:{prefix}="{uri}"' for prefix, uri in HTML_NAMESPACES.items())
    parts = [
        f'<html {namespaces}>',
        '<head><meta http-equiv="Content-Type" content="text/html; charset=utf-8"/></head>',
        '<body>',
        '<mbp:frameset>',
    ]
    parts.extend(entry_to_xhtml(entry, pretty) for entry in entries)
    parts.extend(['</mbp:frameset>', '</body>', '</html>'])
    return custom_replacements(newline.join(parts))


# ============================================================================
# OPF
# ============================================================================

@dataclass
class ContentFile:
    """An XHTML file listed in the manifest and spine."""
    id: str
    filename: str


def media_type(filename: str) -> str:
    """Guess the media type of a manifest item."""
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or 'application/octet-stream'


def make_opf(
    title: str,
    contents: List[ContentFile],
    author: Optional[str] = None,
    cover_image: Optional[str] = None,
    resources: Iterable[str] = (),
    pretty: bool = False,
) -> bytes:
    """
    Build the OPF package document.

    Args:
        title: Dictionary title
        contents: Entry files, in spine order
        author: Optional creator
        cover_image: Cover file name relative to the OPF
        resources: Image files relative to the OPF
        pretty: Pretty-print the output
    """
    opf = '{%s}' % OPF_NS
    dc = '{%s}' % DC_NS

    package = etree.Element(opf + 'package', nsmap={None: OPF_NS, 'dc': DC_NS},
                            attrib={'version': '2.0', 'unique-identifier': 'uid'})

    metadata = etree.SubElement(package, opf + 'metadata')
    etree.SubElement(metadata, dc + 'title').text = title
    etree.SubElement(metadata, dc + 'identifier', attrib={'id': 'uid'}).text = title
    if author:
        creator = etree.SubElement(metadata, dc + 'creator', nsmap={'opf': OPF_NS},
                                   attrib={opf + 'role': 'aut'})
        creator.text = author
    etree.SubElement(metadata, dc + 'language').text = DICTIONARY_LANGUAGE

    x_metadata = etree.SubElement(metadata, opf + 'x-metadata')
    etree.SubElement(x_metadata, opf + 'DictionaryInLanguage').text = DICTIONARY_LANGUAGE
    etree.SubElement(x_metadata, opf + 'DictionaryOutLanguage').text = DICTIONARY_LANGUAGE
    etree.SubElement(x_metadata, opf + 'DefaultLookupIndex').text = LOOKUP_INDEX_NAME

    manifest = etree.SubElement(package, opf + 'manifest')
    for content in contents:
        etree.SubElement(manifest, opf + 'item', attrib={
            'id': content.id,
            'href': content.filename,
            'media-type': 'application/xhtml+xml',
        })

    if cover_image:
        etree.SubElement(manifest, opf + 'item', attrib={
            'id': 'cover',
            'href': cover_image,
            'media-type': media_type(cover_image),
            'properties': 'cover-image',
        })

    for count, resource in enumerate(resources):
        etree.SubElement(manifest, opf + 'item', attrib={
            'id': f"r-{_base36(count)}",
            'href': resource,
            'media-type': media_type(resource),
        })

    spine = etree.SubElement(package, opf + 'spine')
    for content in contents:
        etree.SubElement(spine, opf + 'itemref', attrib={'idref': content.id})

    return etree.tostring(package, xml_declaration=True, encoding='utf-8', pretty_print=pretty)


def _base36(number: int) -> str:
    digits = '0123456789abcdefghijklmnopqrstuvwxyz'
    result = ''
    while True:
        number, remainder = divmod(number, 36)
        result = digits[remainder] + result
        if number == 0:
            return result


# ============================================================================
# Output
# ============================================================================

def write_dictionary(
    entries: List[KindleEntry],
    output_dir: Path,
    title: str,
    author: Optional[str] = None,
    cover_image: Optional[str] = None,
    resources: Iterable[str] = (),
    pretty: bool = False,
    entries_per_file: int = ENTRIES_PER_FILE,
) -> Path:
    """
    Write the XHTML entry files and the OPF.

    Returns:
        Path of the written OPF file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    chunks = [entries[i:i + entries_per_file] for i in range(0, len(entries), entries_per_file)]
    contents: List[ContentFile] = []

    logger.info("Writing html files")
    for i, chunk in enumerate(chunks):
        content = ContentFile(id=f"entries-{i}", filename=f"entries-{i}.html")
        (output_dir / content.filename).write_text(entries_to_xhtml(chunk, pretty), encoding='utf-8')
        contents.append(content)
        logger.info(f"Progress: {i + 1}/{len(chunks)} ({(i + 1) / len(chunks) * 100:.2f}%)")

    opf_path = output_dir / f"{title}.opf"
    opf_path.write_bytes(make_opf(title, contents, author, cover_image, resources, pretty))
    logger.info(f"Wrote {opf_path}")

    return opf_path
