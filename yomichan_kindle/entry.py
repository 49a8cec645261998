"""
Kindle dictionary entries.

A KindleEntry is the rendering unit of the output: headwords, lookup forms
and the rendered body of one (or, after merging, several) dictionary rows.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree

from yomichan_kindle.render import PathMap, render_content
from yomichan_kindle.search import SearchData, build_search_data
from yomichan_kindle.yomichan import Content, DictionaryEntry


@dataclass
class KindleEntry:
    """
    One entry of the Kindle dictionary.

    Attributes:
        headwords: Headwords in display order, unique
        bold_headword: Whether the headword label is shown in bold
        search_data: Lookup strings with their inflections, unique by term
        body: <div> holding the rendered definitions
        frequency: Popularity score used for ordering
    """
    headwords: List[str]
    bold_headword: bool
    search_data: List[SearchData]
    body: etree._Element
    frequency: float = 0

    @property
    def body_markup(self) -> str:
        """Serialized body, used to detect identical entries."""
        return etree.tostring(self.body, encoding='unicode')

    @property
    def forms(self) -> List[str]:
        """Every unique lookup form: terms and inflection values."""
        forms: List[str] = []
        seen = set()
        for data in self.search_data:
            for form in data.forms:
                if form not in seen:
                    seen.add(form)
                    forms.append(form)
        return forms


def render_definitions(
    definitions: List[Content],
    first_line_as_headword: bool = True,
    path_map: Optional[PathMap] = None,
):
    """
    Render definitions into a <div>, separated by <br/>.

    Only the first definition may carry the bold first line.

    Returns:
        Tuple of (div element, headword flag of the first definition)
    """
    body = etree.Element('div')
    bold_headword = True

    for i, definition in enumerate(definitions):
        if i > 0:
            etree.SubElement(body, 'br')
        headword = render_content(body, definition, first_line_as_headword and i == 0, path_map)
        if i == 0:
            bold_headword = headword

    return body, bold_headword


def assemble_entry(
    entry: DictionaryEntry,
    path_map: Optional[PathMap] = None,
    first_line_as_headword: bool = True,
    search_data: Optional[List[SearchData]] = None,
) -> KindleEntry:
    """
    Convert a dictionary entry into a Kindle entry.

    Args:
        entry: The parsed term-bank row
        path_map: Original image path -> converted image path
        first_line_as_headword: Bold the first line of the first definition
        search_data: Precomputed search data (built from the entry if omitted)
    """
    if search_data is None:
        search_data = build_search_data(entry)

    body, bold_headword = render_definitions(entry.definitions, first_line_as_headword, path_map)

    return KindleEntry(
        headwords=[entry.term],
        bold_headword=bold_headword,
        search_data=search_data,
        body=body,
        frequency=entry.frequency,
    )
