"""
Lookup index over the generated Kindle entries.

Maps every orth form (terms and inflections) to the positions of the
entries listing it, stored as a marisa_trie.RecordTrie. Kindle matches the
longest indexed prefix of the tapped text, which `longest_match` mimics;
this makes it easy to check which entry an inflected word lands on.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import marisa_trie

from yomichan_kindle.entry import KindleEntry

logger = logging.getLogger(__name__)

# One record per (form, entry): uint32 entry position
RECORD_FORMAT = "<I"


def build_lookup_index(entries: List[KindleEntry]) -> marisa_trie.RecordTrie:
    """Build the index of every lookup form of `entries`."""
    def generate_items():
        for position, entry in enumerate(entries):
            for form in entry.forms:
                yield (form, (position,))

    index = marisa_trie.RecordTrie(RECORD_FORMAT, generate_items())
    logger.info(f"Built lookup index over {len(entries)} entries")
    return index


def lookup(index: marisa_trie.RecordTrie, surface: str) -> List[int]:
    """Get the positions of the entries listing `surface`."""
    return sorted(record[0] for record in index.get(surface, []))


def longest_match(index: marisa_trie.RecordTrie, text: str) -> Optional[Tuple[str, List[int]]]:
    """
    Find the longest indexed form `text` starts with.

    Returns:
        Tuple of (matched form, entry positions), or None
    """
    prefixes = index.prefixes(text)
    if not prefixes:
        return None
    form = max(prefixes, key=len)
    return form, lookup(index, form)


def save_lookup_index(index: marisa_trie.RecordTrie, path: Path):
    """Save the index to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    index.save(str(path))
    logger.info(f"Saved lookup index to {path}")


def load_lookup_index(path: Path) -> marisa_trie.RecordTrie:
    """
    Memory-map a saved index.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Lookup index not found at {path}")
    index = marisa_trie.RecordTrie(RECORD_FORMAT)
    index.mmap(str(path))
    return index
