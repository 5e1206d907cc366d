# -*- coding: utf-8 -*-
"""
Cryptanalysis helpers for the Latin alphabet:
  1. Letter frequency analysis (top-N, percentages)
  2. English-likeness score against E/T/A/O/I/N reference frequencies
  3. Brute force over shifts 1..25
  4. Weak-encryption pattern counters
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Tuple

from caesar_alphabets import LATIN, LATIN_SET
from caesar_engine import CipherEngine, Mode


BRUTE_FORCE_SHIFTS = range(1, 26)
PREVIEW_LENGTH = 50

# Expected English letter frequencies, percent
ENGLISH_REFERENCE = {
    'E': 12.7, 'T': 9.1, 'A': 8.2, 'O': 7.5, 'I': 7.0, 'N': 6.7,
}

COMMON_WORDS = (
    'THE', 'AND', 'FOR', 'ARE', 'BUT', 'NOT', 'YOU', 'ALL',
    'CAN', 'HER', 'WAS', 'ONE', 'OUR', 'HAD', 'BY',
)

_REPEATED_RE = re.compile(r'([A-Z])\1{2,}')
_COMMON_WORD_RE = re.compile(r'\b(' + '|'.join(COMMON_WORDS) + r')\b', re.ASCII)
_DOUBLE_RE = re.compile(r'([A-Z])\1')


# ═══════════════════════════════════════════════════════════════════════════════
# DATA CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FrequencyEntry:
    char: str
    count: int
    percentage: float      # of counted Latin letters, 2 decimals


@dataclass(frozen=True)
class BruteForceCandidate:
    """One decryption attempt"""
    shift: int
    plaintext: str
    score: float           # English-likeness, higher = better
    top_chars: Tuple[FrequencyEntry, ...]

    @property
    def preview(self) -> str:
        if len(self.plaintext) > PREVIEW_LENGTH:
            return self.plaintext[:PREVIEW_LENGTH] + '...'
        return self.plaintext


@dataclass(frozen=True)
class PatternReport:
    repeated_chars: int    # runs of 3+ identical capitals
    common_words: int      # whole-word hits from COMMON_WORDS
    double_letters: int    # non-overlapping doubled capitals


# ═══════════════════════════════════════════════════════════════════════════════
# FREQUENCIES
# ═══════════════════════════════════════════════════════════════════════════════

def frequency_analysis(text: str, top: Optional[int] = 10) -> List[FrequencyEntry]:
    """
    Counts A-Z after upper-casing, most frequent first. Ties keep the order
    in which letters first appeared.
    """
    letters = [c for c in text.upper() if c in LATIN_SET]
    total = len(letters)
    if total == 0:
        return []

    # most_common() sorts stably, so insertion order breaks ties
    ranked = Counter(letters).most_common(top)
    return [
        FrequencyEntry(char, count, round(count / total * 100, 2))
        for char, count in ranked
    ]


def english_score(text: str) -> float:
    """100 minus the total deviation of the top-6 letters from English"""
    deviation = 0.0
    for entry in frequency_analysis(text, top=6):
        expected = ENGLISH_REFERENCE.get(entry.char)
        if expected is not None:
            deviation += abs(expected - entry.percentage)
    return 100 - deviation


# ═══════════════════════════════════════════════════════════════════════════════
# BRUTE FORCE
# ═══════════════════════════════════════════════════════════════════════════════

def brute_force(ciphertext: str, engine: Optional[CipherEngine] = None) -> List[BruteForceCandidate]:
    """Every Latin shift, best English score first"""
    engine = engine or CipherEngine()
    candidates = []
    for shift in BRUTE_FORCE_SHIFTS:
        plaintext = engine.transform(ciphertext, shift, Mode.DECRYPT, alphabet=LATIN)
        candidates.append(BruteForceCandidate(
            shift=shift,
            plaintext=plaintext,
            score=english_score(plaintext),
            top_chars=tuple(frequency_analysis(plaintext, top=3)),
        ))
    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates


def best_candidate(ciphertext: str, engine: Optional[CipherEngine] = None) -> BruteForceCandidate:
    return brute_force(ciphertext, engine)[0]


# ═══════════════════════════════════════════════════════════════════════════════
# PATTERNS
# ═══════════════════════════════════════════════════════════════════════════════

def detect_patterns(text: str) -> PatternReport:
    """Case-sensitive: only capital letters count, as in classic ciphertext"""
    return PatternReport(
        repeated_chars=sum(1 for _ in _REPEATED_RE.finditer(text)),
        common_words=sum(1 for _ in _COMMON_WORD_RE.finditer(text)),
        double_letters=sum(1 for _ in _DOUBLE_RE.finditer(text)),
    )
