"""
Kana character utilities.

Hiragana/katakana conversion and the consonant-row table used to move a
mora to another vowel column (dan).
"""

import unicodedata
from enum import Enum
from typing import Optional


# ============================================================================
# Hiragana / Katakana
# ============================================================================

KATAKANA_HIRAGANA_SHIFT = ord('\u3041') - ord('\u30a1')
HIRAGANA_KATAKANA_SHIFT = ord('\u30a1') - ord('\u3041')


def to_hiragana(text: str) -> str:
    """Convert every katakana character (U+30A1-U+30F6) to hiragana."""
    return ''.join(
        chr(ord(ch) + KATAKANA_HIRAGANA_SHIFT) if '\u30a0' < ch < '\u30f7' else ch
        for ch in text
    )


def to_katakana(text: str) -> str:
    """Convert every hiragana character (U+3041-U+3096) to katakana."""
    return ''.join(
        chr(ord(ch) + HIRAGANA_KATAKANA_SHIFT) if '\u3040' < ch < '\u3097' else ch
        for ch in text
    )


# Compatibility ideographs that are unified ideographs in their own right
UNIFIED_COMPATIBILITY_IDEOGRAPHS = frozenset(
    '\ufa0e\ufa0f\ufa11\ufa13\ufa14\ufa1f\ufa21\ufa23\ufa24\ufa27\ufa28\ufa29'
)


def is_kanji(char: str) -> bool:
    """Check if a single character has the Unicode Unified_Ideograph property."""
    if len(char) != 1:
        return False
    if char in UNIFIED_COMPATIBILITY_IDEOGRAPHS:
        return True
    return unicodedata.name(char, '').startswith('CJK UNIFIED IDEOGRAPH')


# ============================================================================
# Vowel Columns (Dan)
# ============================================================================

class Dan(Enum):
    """Vowel column of the kana table."""
    A = 0
    I = 1
    U = 2
    E = 3
    O = 4


# Rows: a, ka, sa, ta, na, ha, ma, ya, ra, wa, ga, za, da, ba, pa
KANA_TABLE = (
    'あいうえお',
    'かきくけこ',
    'さしすせそ',
    'たちつてと',
    'なにぬねの',
    'はひふへほ',
    'まみむめも',
    'やいゆえよ',
    'らりるれろ',
    'わいうえを',
    'がぎぐげご',
    'ざじずぜぞ',
    'だぢづでど',
    'ばびぶべぼ',
    'ぱぴぷぺぽ',
)


def convert_to_dan(mora: str, dan: Dan) -> Optional[str]:
    """
    Move a mora to another vowel column of its consonant row.

    Args:
        mora: A single kana character
        dan: Target vowel column

    Returns:
        The character in the same row at the requested column, or None if
        the input is not a single character found in the table
    """
    if len(mora) != 1:
        return None

    for row in KANA_TABLE:
        if mora in row:
            return row[dan.value]

    return None
