"""
Reference dictionary merge.

A second (main) dictionary supplies frequencies, missing inflection classes
and alternate writings for the entries of the dictionary being converted.
Entries are matched by term and reading; alternate writings are the
reference rows sharing a sequence number.
"""

import logging
from collections import defaultdict
from typing import Dict, List

from yomichan_kindle.yomichan import DictionaryEntry

logger = logging.getLogger(__name__)


def group_by_term(entries: List[DictionaryEntry]) -> Dict[str, Dict[str, List[DictionaryEntry]]]:
    """Group entries by term, then by reading."""
    result: Dict[str, Dict[str, List[DictionaryEntry]]] = defaultdict(lambda: defaultdict(list))
    for entry in entries:
        result[entry.term][entry.reading].append(entry)
    return result


def group_by_sequence(entries: List[DictionaryEntry]) -> Dict[int, List[DictionaryEntry]]:
    """Group entries by sequence number."""
    result: Dict[int, List[DictionaryEntry]] = defaultdict(list)
    for entry in entries:
        result[entry.sequence].append(entry)
    return result


def _union_tags(references: List[DictionaryEntry]) -> str:
    tags: List[str] = []
    for reference in references:
        for tag in reference.inflection_class.split():
            if tag not in tags:
                tags.append(tag)
    return ' '.join(tags)


def merge_reference_data(
    entries: List[DictionaryEntry],
    reference_entries: List[DictionaryEntry],
) -> List[DictionaryEntry]:
    """
    Enrich entries with data from a reference dictionary.

    For every entry found in the reference (by term and reading, or by term
    alone when the entry has no reading):
    - frequency becomes the highest reference frequency
    - an empty inflection class is filled from the reference rows
    - reference writings sharing a sequence number, and absent from
      `entries`, are added as copies of the entry under that writing

    Entries are updated in place.

    Returns:
        The entries followed by the added alternate writings
    """
    reference_terms = group_by_term(reference_entries)
    reference_sequences = group_by_sequence(reference_entries)
    current_terms = {entry.term for entry in entries}

    added: List[DictionaryEntry] = []
    matched = 0

    for entry in entries:
        readings = reference_terms.get(entry.term)
        if not readings:
            continue

        if entry.reading:
            references = readings.get(entry.reading)
        else:
            references = next(iter(readings.values()))
        if not references:
            continue

        matched += 1
        entry.frequency = max(reference.frequency for reference in references)

        if not entry.inflection_class:
            entry.inflection_class = _union_tags(references)

        for reference in references:
            for alternate in reference_sequences[reference.sequence]:
                if alternate.term != entry.term and alternate.term not in current_terms:
                    added.append(entry.with_term(alternate.term))

    logger.info(f"Matched {matched} entries in reference dictionary, added {len(added)} alternate writings")

    return entries + added
