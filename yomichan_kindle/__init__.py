"""
yomichan-kindle: Yomichan dictionaries for the Kindle

Converts a Yomichan term-bank dictionary into Kindle dictionary sources
(XHTML + OPF). Every verb and adjective is indexed under its conjugation
stems so Kindle's lookup finds inflected words.

Basic Usage:
    from yomichan_kindle import convert, generate_inflections
    from yomichan_kindle.yomichan import load_term_banks

    entries = load_term_banks(Path("jitendex"))
    kindle_entries = convert(entries)

    for inflection in generate_inflections("書く", "v5"):
        print(f"{inflection.value} ({inflection.name})")
"""

from typing import List, Optional

from yomichan_kindle.entry import KindleEntry, assemble_entry
from yomichan_kindle.inflections import Inflection, InflectionClass, generate_inflections
from yomichan_kindle.merge import merge_entries
from yomichan_kindle.render import PathMap
from yomichan_kindle.search import SearchData, build_search_data
from yomichan_kindle.yomichan import DictionaryEntry

__version__ = "0.1.0"

__all__ = [
    'convert',
    'generate_inflections',
    'build_search_data',
    'assemble_entry',
    'merge_entries',
    'DictionaryEntry',
    'KindleEntry',
    'SearchData',
    'Inflection',
    'InflectionClass',
    '__version__',
]


def convert(
    entries: List[DictionaryEntry],
    path_map: Optional[PathMap] = None,
    first_line_as_headword: bool = True,
) -> List[KindleEntry]:
    """
    Convert dictionary entries into merged Kindle entries.

    Args:
        entries: Parsed term-bank entries
        path_map: Original image path -> converted image path
        first_line_as_headword: Bold the first line of each entry

    Returns:
        Merged entries, most frequent first
    """
    kindle_entries = [
        assemble_entry(entry, path_map, first_line_as_headword)
        for entry in entries
    ]
    return merge_entries(kindle_entries)
