"""
Search data for Kindle lookup.

Each entry is indexed under its headword, its reading and the 々 spelling
of any doubled kanji, together with the inflections of each.
"""

from dataclasses import dataclass, field
from typing import List

from yomichan_kindle.inflections import Inflection, generate_inflections
from yomichan_kindle.kana import is_kanji
from yomichan_kindle.yomichan import DictionaryEntry

ITERATION_MARK = '々'


@dataclass(slots=True)
class SearchData:
    """A lookup string and its inflected forms."""
    term: str
    inflections: List[Inflection] = field(default_factory=list)

    @property
    def forms(self) -> List[str]:
        """The term followed by every inflection value."""
        return [self.term] + [i.value for i in self.inflections]


def iteration_mark_variants(term: str) -> List[str]:
    """
    Spell doubled kanji with the iteration mark.

    One variant per adjacent pair: 民民 -> 民々.
    """
    variants = []
    for i in range(len(term) - 1):
        if term[i] == term[i + 1] and is_kanji(term[i]):
            variants.append(term[:i + 1] + ITERATION_MARK + term[i + 2:])
    return variants


def search_terms(entry: DictionaryEntry) -> List[str]:
    """Get the unique lookup strings of an entry."""
    candidates = [entry.term, entry.reading] + iteration_mark_variants(entry.term)
    terms = []
    for term in candidates:
        if term and term not in terms:
            terms.append(term)
    return terms


def build_search_data(entry: DictionaryEntry) -> List[SearchData]:
    """Build the search data of an entry, inflections included."""
    return [
        SearchData(term, generate_inflections(term, entry.inflection_class, entry.term))
        for term in search_terms(entry)
    ]
