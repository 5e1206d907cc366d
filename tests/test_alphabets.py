import pytest

from caesar_alphabets import (
    ALPHABETS,
    DIGITS,
    LATIN,
    PERSIAN,
    alphabet_counts,
    detect_alphabet,
    get_alphabet,
    to_ascii_digits,
)


def test_alphabet_sizes():
    assert (LATIN.size, PERSIAN.size, DIGITS.size) == (26, 32, 10)
    for alphabet in ALPHABETS:
        assert len(set(alphabet.letters)) == alphabet.size


def test_membership():
    assert 'q' in LATIN and 'Q' in LATIN
    assert 'ژ' in PERSIAN and 'ژ' not in LATIN
    assert '7' in DIGITS and '۷' not in DIGITS
    assert 'ab' not in LATIN


def test_get_alphabet_aliases():
    assert get_alphabet('latin') is LATIN
    assert get_alphabet('English') is LATIN
    assert get_alphabet('persian') is PERSIAN
    with pytest.raises(KeyError):
        get_alphabet('cyrillic')


@pytest.mark.parametrize('text', ['', '   ', '12345', '!?', 'ab' + 'بپ'])
def test_detect_defaults_to_latin_on_ties(text):
    assert detect_alphabet(text) is LATIN


def test_detect_persian_majority():
    assert detect_alphabet('a سلام') is PERSIAN
    assert detect_alphabet('Hello سلام') is LATIN


def test_counts_fold_case_and_ignore_digits():
    assert alphabet_counts('aB 12 سل') == (2, 2)


def test_persian_digits():
    assert to_ascii_digits('۱۲۳') == '123'
    assert to_ascii_digits('-۰۹') == '-09'


def test_arabic_digits():
    assert to_ascii_digits('٢') == '2'
    assert to_ascii_digits('٠٣٩') == '039'


def test_arabic_one_is_not_mapped():
    assert to_ascii_digits('١') == '١'


def test_other_characters_pass_through():
    assert to_ascii_digits('shift: 7 سلام') == 'shift: 7 سلام'
