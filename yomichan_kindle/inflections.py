"""
Inflection generator for yomichan-kindle.

Kindle's lookup only matches surface forms listed in the index, so every
conjugation stem a reader may tap on has to be generated up front.
Given a headword and its Yomichan inflection-class tags, this module derives
the stems of its paradigm (irrealis, continuative, conditional, imperative,
te-form...). Longer inflections such as 書かない start with one of these
stems, which is what Kindle matches on.

Rules are table-driven: one table of suffix replacements per inflection
class, plus the vowel-shift logic for Godan verbs.

Example:
    >>> [i.value for i in generate_inflections("見る", "v1")]
    ['見', '見れ', '見ろ', '見よ']
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from yomichan_kindle.kana import Dan, convert_to_dan


# ============================================================================
# Inflection Classes
# ============================================================================

class InflectionClass(Enum):
    """Yomichan inflection-class tags (the `rules` column of a term bank)."""
    GODAN = 'v5'
    ICHIDAN = 'v1'
    SURU = 'vs'
    KURU = 'vk'
    ZURU = 'vz'
    I_ADJECTIVE = 'adj-i'


# Long names accepted alongside the Yomichan codes
CLASS_ALIASES: Dict[str, InflectionClass] = {
    'godan': InflectionClass.GODAN,
    'ichidan': InflectionClass.ICHIDAN,
    'suru': InflectionClass.SURU,
    'kuru': InflectionClass.KURU,
    'zuru': InflectionClass.ZURU,
    'iadjective': InflectionClass.I_ADJECTIVE,
}


def parse_inflection_class(tag: str) -> Optional[InflectionClass]:
    """Get the InflectionClass for a tag, or None if it is not recognized."""
    try:
        return InflectionClass(tag)
    except ValueError:
        return CLASS_ALIASES.get(tag.lower())


def split_inflection_classes(tags: str) -> List[InflectionClass]:
    """
    Parse a space-separated tag string.

    Unknown tags are skipped; use `unknown_inflection_tags` to detect them.
    """
    classes = []
    for tag in tags.split():
        inflection_class = parse_inflection_class(tag)
        if inflection_class is not None and inflection_class not in classes:
            classes.append(inflection_class)
    return classes


def unknown_inflection_tags(tags: str) -> List[str]:
    """Get the tags of a tag string that are outside the enumeration."""
    return [tag for tag in tags.split() if parse_inflection_class(tag) is None]


# ============================================================================
# Inflection Records
# ============================================================================

@dataclass(frozen=True, slots=True)
class Inflection:
    """
    A generated surface form.

    Attributes:
        name: Paradigm slot label (e.g. "未然形", "仮定形・命令形")
        value: The inflected surface form
    """
    name: str
    value: str


# Paradigm slot labels
MIZEN = '未然形'
RENYOU = '連用形'
MIZEN_RENYOU = '未然形・連用形'
SHUUSHI_RENTAI = '終止形・連体形'
KATEI = '仮定形'
MEIREI = '命令形'
KATEI_MEIREI = '仮定形・命令形'
TE = 'て形'
ONBIN = '音便形'
GOKAN = '語幹'


@dataclass(frozen=True)
class SuffixRule:
    """
    Replace the ending of a word.

    Attributes:
        name: Paradigm slot label of the produced form
        suffixes: Endings the rule applies to
        replacement: Text substituted for the ending
    """
    name: str
    suffixes: Tuple[str, ...]
    replacement: str

    def apply(self, word: str) -> Optional[str]:
        """Apply the rule, or return None if the word has none of the endings."""
        for suffix in self.suffixes:
            if word.endswith(suffix):
                return word[:-len(suffix)] + self.replacement
        return None


def _rules(suffixes: Tuple[str, ...], *pairs: Tuple[str, str]) -> Tuple[SuffixRule, ...]:
    return tuple(SuffixRule(name, suffixes, replacement) for name, replacement in pairs)


# ============================================================================
# Rule Tables
# ============================================================================

ICHIDAN_RULES = _rules(
    ('る',),
    (MIZEN_RENYOU, ''),
    (KATEI, 'れ'),
    (MEIREI, 'ろ'),
    (MEIREI, 'よ'),
)

# Headwords may be written 来る or くる
KURU_RULES = _rules(
    ('来る',),
    (MIZEN_RENYOU, '来'),
    (KATEI, '来れ'),
    (MEIREI, '来い'),
    (TE, '来て'),
) + _rules(
    ('くる',),
    (MIZEN, 'こ'),
    (RENYOU, 'き'),
    (KATEI, 'くれ'),
    (MEIREI, 'こい'),
    (TE, 'きて'),
)

SURU_RULES = _rules(
    ('する',),
    (MIZEN_RENYOU, 'し'),
    (MIZEN, 'せ'),
    (MIZEN, 'さ'),
    (SHUUSHI_RENTAI, 'す'),
    (KATEI, 'すれ'),
    (MEIREI, 'しろ'),
    (MEIREI, 'せよ'),
    (TE, 'して'),
)

# じる and ずる spellings conjugate into each other
ZURU_RULES = _rules(
    ('じる', 'ずる'),
    (MIZEN_RENYOU, 'じ'),
    (MIZEN, 'ぜ'),
    (MIZEN, 'ざ'),
    (SHUUSHI_RENTAI, 'ずる'),
    (SHUUSHI_RENTAI, 'じる'),
    (SHUUSHI_RENTAI, 'ず'),
    (KATEI, 'ずれ'),
    (KATEI, 'じれ'),
    (MEIREI, 'じろ'),
    (MEIREI, 'ぜよ'),
    (MEIREI, 'じよ'),
)

I_ADJECTIVE_RULES = _rules(
    ('い',),
    (MIZEN, 'かろ'),
    (RENYOU, 'かっ'),
    (RENYOU, 'く'),
    (KATEI, 'けれ'),
    # Bare stem, so that an older ～し entry still matches modern usage
    (GOKAN, ''),
)

ZURU_SUFFIXES = ('じる', 'ずる')


def apply_rules(word: str, rules: Iterable[SuffixRule]) -> List[Inflection]:
    """Apply every rule of a table that matches the ending of `word`."""
    inflections = []
    for rule in rules:
        value = rule.apply(word)
        if value is not None:
            inflections.append(Inflection(rule.name, value))
    return inflections


# ============================================================================
# Godan Verbs
# ============================================================================

GODAN_ENDINGS = frozenset('うくすつぬふむるぐずづぶぷ')

# Endings of 行く and its compounds, whose euphonic stem is 行っ
IKU_ENDINGS = ('行く', '逝く', '往く', 'いく', 'ゆく')


def _shift(word: str, dan: Dan) -> Optional[str]:
    """Move the last mora of a word to another vowel column."""
    if not word:
        return None
    shifted = convert_to_dan(word[-1], dan)
    if shifted is None:
        return None
    return word[:-1] + shifted


def _euphonic_stem(term: str, original_term: str) -> Optional[str]:
    """Get the sound-changed continuative stem used before て/た."""
    stem = term[:-1]
    if original_term.endswith(IKU_ENDINGS):
        return stem + 'っ'
    last = term[-1]
    if last in 'くぐ':
        return stem + 'い'
    if last in 'うつる':
        return stem + 'っ'
    if last in 'ぬぶむ':
        return stem + 'ん'
    return None


def godan_inflections(term: str, original_term: str) -> List[Inflection]:
    """
    Generate the stems of a Godan verb.

    The generic い-column continuative is always emitted, even when the
    euphonic stem replaces it in the te-form (書き and 書い).
    """
    if not term or term[-1] not in GODAN_ENDINGS:
        return []

    inflections = []

    i_form = _shift(term, Dan.I)
    if i_form:
        inflections.append(Inflection(RENYOU, i_form))

    euphonic = _euphonic_stem(term, original_term)
    if euphonic:
        inflections.append(Inflection(ONBIN, euphonic))

    a_form = _shift(term, Dan.A)
    if a_form:
        inflections.append(Inflection(MIZEN, a_form))

    o_form = _shift(term, Dan.O)
    if o_form:
        inflections.append(Inflection(MIZEN, o_form))

    e_form = _shift(term, Dan.E)
    if e_form:
        inflections.append(Inflection(KATEI_MEIREI, e_form))

    return inflections


# ============================================================================
# Dispatch
# ============================================================================

InflectionFunc = Callable[[str, str], List[Inflection]]


def _table(rules: Tuple[SuffixRule, ...]) -> InflectionFunc:
    return lambda term, original_term: apply_rules(term, rules)


INFLECTION_FUNCS: Dict[InflectionClass, InflectionFunc] = {
    InflectionClass.GODAN: godan_inflections,
    InflectionClass.ICHIDAN: _table(ICHIDAN_RULES),
    InflectionClass.SURU: _table(SURU_RULES),
    InflectionClass.KURU: _table(KURU_RULES),
    InflectionClass.ZURU: _table(ZURU_RULES),
    InflectionClass.I_ADJECTIVE: _table(I_ADJECTIVE_RULES),
}


def generate_inflections(
    term: str,
    inflection_class: str,
    original_term: Optional[str] = None,
) -> List[Inflection]:
    """
    Generate the inflected surface forms of a word.

    Args:
        term: The surface form to inflect (headword, reading or variant)
        inflection_class: Space-separated inflection-class tags
        original_term: The entry's headword, used for irregular verb checks.
            Defaults to `term`.

    Returns:
        Inflections unique by value, none empty and none equal to `term`.
        Unknown tags and unmatched endings produce nothing.
    """
    if original_term is None:
        original_term = term

    candidates: List[Inflection] = []
    for cls in split_inflection_classes(inflection_class):
        candidates.extend(INFLECTION_FUNCS[cls](term, original_term))

    # 投じる and 投ずる are used interchangeably, whatever the declared class
    if term.endswith(ZURU_SUFFIXES):
        candidates.extend(apply_rules(term, ZURU_RULES))

    seen = set()
    inflections = []
    for inflection in candidates:
        if inflection.value in seen:
            continue
        seen.add(inflection.value)
        if inflection.value and inflection.value != term:
            inflections.append(inflection)

    return inflections
