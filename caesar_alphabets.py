# -*- coding: utf-8 -*-
"""Alphabets known to the shift engine, script detection and numeral folding"""

from dataclasses import dataclass
from typing import Dict, Tuple


# ═══════════════════════════════════════════════════════════════════════════════
# ALPHABETS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Alphabet:
    """Fixed ordered character set; its size is the shift modulus"""
    name: str
    letters: str
    cased: bool = False

    @property
    def size(self) -> int:
        return len(self.letters)

    def __contains__(self, char: str) -> bool:
        if len(char) != 1:
            return False
        return (char.upper() if self.cased else char) in self.letters


LATIN = Alphabet('english', 'ABCDEFGHIJKLMNOPQRSTUVWXYZ', cased=True)
PERSIAN = Alphabet('persian', 'ابپتثجچحخدذرزژسشصضطظعغفقکگلمنوهی')
DIGITS = Alphabet('digits', '0123456789')

ALPHABETS: Tuple[Alphabet, ...] = (LATIN, PERSIAN, DIGITS)

LATIN_SET = frozenset(LATIN.letters)
PERSIAN_SET = frozenset(PERSIAN.letters)

_ALIASES = {'latin': 'english', 'en': 'english', 'fa': 'persian'}


def get_alphabet(name: str) -> Alphabet:
    key = _ALIASES.get(name.lower(), name.lower())
    for alphabet in ALPHABETS:
        if alphabet.name == key:
            return alphabet
    raise KeyError(f'unknown alphabet: {name!r}')


# ═══════════════════════════════════════════════════════════════════════════════
# DETECTION
# ═══════════════════════════════════════════════════════════════════════════════

def alphabet_counts(text: str) -> Tuple[int, int]:
    """(latin, persian) letter counts; digits are ignored"""
    latin = persian = 0
    for char in text:
        if char.upper() in LATIN_SET:
            latin += 1
        elif char in PERSIAN_SET:
            persian += 1
    return latin, persian


def detect_alphabet(text: str) -> Alphabet:
    """Dominant script of the text. Latin wins ties, including empty text."""
    latin, persian = alphabet_counts(text)
    return PERSIAN if persian > latin else LATIN


# ═══════════════════════════════════════════════════════════════════════════════
# NUMERALS
# ═══════════════════════════════════════════════════════════════════════════════

PERSIAN_DIGITS = '۰۱۲۳۴۵۶۷۸۹'

# Arabic-Indic one (U+0661) has never been in this table; it passes through.
ARABIC_DIGITS = {
    '٠': '0', '٢': '2', '٣': '3', '٤': '4',
    '٥': '5', '٦': '6', '٧': '7', '٨': '8', '٩': '9',
}

NUMERAL_MAP: Dict[str, str] = {
    **{glyph: str(i) for i, glyph in enumerate(PERSIAN_DIGITS)},
    **ARABIC_DIGITS,
}

_NUMERAL_TABLE = str.maketrans(NUMERAL_MAP)


def to_ascii_digits(value: str) -> str:
    """Folds Persian and Arabic-Indic digit glyphs to ASCII digits"""
    return value.translate(_NUMERAL_TABLE)
