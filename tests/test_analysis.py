import pytest

from caesar_analysis import (
    BRUTE_FORCE_SHIFTS,
    FrequencyEntry,
    PatternReport,
    best_candidate,
    brute_force,
    detect_patterns,
    english_score,
    frequency_analysis,
)
from caesar_engine import CipherEngine, ShiftTableCache

PLAINTEXT = (
    'It was the best of times it was the worst of times it was the age of '
    'wisdom it was the age of foolishness it was the epoch of belief it was '
    'the epoch of incredulity'
)
UNIFORM_CONTROL = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'


@pytest.fixture
def engine():
    return CipherEngine(cache=ShiftTableCache().warm())


def test_frequency_equal_counts():
    assert frequency_analysis('AABB') == [
        FrequencyEntry('A', 2, 50.0),
        FrequencyEntry('B', 2, 50.0),
    ]


def test_frequency_case_folds_and_ignores_non_latin():
    entries = frequency_analysis('aab! سلام 123')
    assert entries == [
        FrequencyEntry('A', 2, 66.67),
        FrequencyEntry('B', 1, 33.33),
    ]


def test_frequency_ties_keep_first_seen_order():
    assert [e.char for e in frequency_analysis('zyxzyx')] == ['Z', 'Y', 'X']


def test_frequency_top_ten():
    entries = frequency_analysis(UNIFORM_CONTROL + 'Q')
    assert len(entries) == 10
    assert entries[0] == FrequencyEntry('Q', 2, 7.41)
    assert [e.char for e in entries[1:4]] == ['A', 'B', 'C']


def test_frequency_empty():
    assert frequency_analysis('123 !!') == []


def test_english_score_ignores_letters_outside_reference():
    assert english_score('xyzzy') == 100
    assert english_score('') == 100


def test_english_score_penalizes_deviation():
    assert english_score('EEEE') == pytest.approx(100 - (100 - 12.7))
    assert english_score('ET') == pytest.approx(100 - (50 - 12.7) - (50 - 9.1))


def test_brute_force_covers_all_shifts_sorted(engine):
    ciphertext = engine.encrypt(PLAINTEXT, 7)
    candidates = brute_force(ciphertext, engine)

    assert sorted(c.shift for c in candidates) == list(BRUTE_FORCE_SHIFTS)
    scores = [c.score for c in candidates]
    assert scores == sorted(scores, reverse=True)


def test_brute_force_true_shift_beats_uniform_control(engine):
    ciphertext = engine.encrypt(PLAINTEXT, 7)
    true = next(c for c in brute_force(ciphertext, engine) if c.shift == 7)

    assert true.plaintext == PLAINTEXT
    assert true.score > english_score(UNIFORM_CONTROL)
    assert true.top_chars[0].char == 'T'
    assert len(true.top_chars) == 3


def test_brute_force_uses_latin_modulus_for_persian_heavy_text(engine):
    ciphertext = 'سلام دنیا Khoor'
    candidate = next(c for c in brute_force(ciphertext, engine) if c.shift == 3)
    assert candidate.plaintext.endswith('Hello')


def test_candidate_preview(engine):
    candidate = best_candidate(engine.encrypt(PLAINTEXT, 4), engine)
    assert candidate.preview == candidate.plaintext[:50] + '...'
    short = best_candidate('Khoor', engine)
    assert short.preview == short.plaintext


def test_patterns():
    report = detect_patterns('THE CAT AND THE DOG WAS BY THE SEA AAA BOOK')
    assert report == PatternReport(repeated_chars=1, common_words=6, double_letters=2)


def test_patterns_are_case_sensitive():
    assert detect_patterns('the aaa book') == PatternReport(0, 0, 0)


def test_patterns_need_whole_words():
    assert detect_patterns('THEM BAND').common_words == 0
