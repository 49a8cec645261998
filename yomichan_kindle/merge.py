"""
Merging of Kindle entries with identical bodies.

Alternate writings of one word usually share their definitions; they are
folded into a single entry carrying every headword and lookup form.
"""

from typing import Dict, List

from yomichan_kindle.entry import KindleEntry
from yomichan_kindle.search import SearchData


def merge_search_data(groups: List[List[SearchData]]) -> List[SearchData]:
    """Union search data by term, and inflections by value within a term."""
    merged: Dict[str, SearchData] = {}
    seen_values: Dict[str, set] = {}

    for search_data in groups:
        for data in search_data:
            target = merged.get(data.term)
            if target is None:
                target = SearchData(data.term, [])
                merged[data.term] = target
                seen_values[data.term] = set()
            seen = seen_values[data.term]
            for inflection in data.inflections:
                if inflection.value not in seen:
                    seen.add(inflection.value)
                    target.inflections.append(inflection)

    return list(merged.values())


def merge_group(entries: List[KindleEntry]) -> KindleEntry:
    """
    Merge entries sharing one body.

    Headwords and search data are unioned in first-seen order; the bold flag
    and body come from the first entry; frequency is the maximum.
    """
    first = entries[0]
    if len(entries) == 1:
        return first

    headwords: List[str] = []
    for entry in entries:
        for headword in entry.headwords:
            if headword not in headwords:
                headwords.append(headword)

    return KindleEntry(
        headwords=headwords,
        bold_headword=first.bold_headword,
        search_data=merge_search_data([entry.search_data for entry in entries]),
        body=first.body,
        frequency=max(entry.frequency for entry in entries),
    )


def merge_entries(entries: List[KindleEntry]) -> List[KindleEntry]:
    """
    Merge entries whose rendered bodies are identical.

    Returns:
        Merged entries sorted by descending frequency. The sort is stable,
        so ties keep the order in which their groups first appeared.
    """
    groups: Dict[str, List[KindleEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.body_markup, []).append(entry)

    merged = [merge_group(group) for group in groups.values()]
    return sorted(merged, key=lambda entry: -entry.frequency)
