import pytest

from invoice_extractor.preprocessor.normalizer import TextNormalizer, normalize_text
from invoice_extractor.utils.exceptions import InvalidTextError


@pytest.fixture
def normalizer():
    return TextNormalizer(join_after_marks=True)


@pytest.mark.parametrize("raw, expected", [
    ("J o h n  D o e", "John Doe"),
    ("I N V O I C E To: Karim", "INVOICE To: Karim"),
    ("T o t a l: 5", "Total: 5"),
])
def test_spaced_latin_letters_are_joined(normalizer, raw, expected):
    assert normalizer.normalize(raw) == expected


def test_short_letter_pairs_and_real_words_are_kept(normalizer):
    assert normalizer.normalize("A B Traders") == "A B Traders"
    assert normalizer.normalize("Md. Karim Uddin") == "Md. Karim Uddin"


def test_gaps_between_digits_are_removed(normalizer):
    assert normalizer.normalize("Phone 017 1234 5678") == "Phone 01712345678"


def test_punctuation_spacing(normalizer):
    assert normalizer.normalize("Dhaka , Bangladesh") == "Dhaka, Bangladesh"
    assert normalizer.normalize("Name : Karim") == "Name: Karim"
    assert normalizer.normalize("( Mirpur )") == "(Mirpur)"


def test_whitespace_and_line_breaks(normalizer):
    assert normalizer.normalize("  a \t b  \r\n\r\n\n   c  ") == "a b\nc"


def test_line_breaks_are_preserved(normalizer):
    assert normalizer.normalize("Karim\nMirpur") == "Karim\nMirpur"


def test_zero_width_and_nbsp(normalizer):
    assert normalizer.normalize("Ka\u200brim\u00a0Ahmed") == "Karim Ahmed"
    assert normalizer.normalize("a\u200cb") == "ab"


def test_joiner_inside_bangla_is_kept(normalizer):
    text = "\u0995\u09cd\u200c\u09b7"
    assert normalizer.normalize(text) == text


def test_bangla_base_and_mark_are_rejoined(normalizer):
    # "ক ি" -> "কি"
    assert normalizer.normalize("\u0995 \u09bf") == "\u0995\u09bf"


def test_join_after_marks_can_be_disabled():
    text = "\u0995\u09bf \u0995"
    assert TextNormalizer(join_after_marks=True).normalize(text) == "\u0995\u09bf\u0995"
    assert TextNormalizer(join_after_marks=False).normalize(text) == text


def test_nfc_composition(normalizer):
    # e + combining acute -> é
    assert normalizer.normalize("Jose\u0301") == "Jos\u00e9"


def test_empty_text(normalizer):
    assert normalizer.normalize("") == ""
    assert normalizer.normalize(" \n\t ") == ""


@pytest.mark.parametrize("raw", [
    "I n v o i c e   T o :  J o h n  D o e\n\n017 1234 5678\nHouse 5 , Road 2",
    "1\u200c 2 3",
    "Ka\u00a0 rim\u200b ,  Dhaka\r\n\r\n( 1212 )",
    "\u0995 \u09bf \u0995 \u200d \u09cd",
    "A B C D E",
    "Total : Tk 1 , 250 . 50",
    "",
])
def test_normalize_is_idempotent(normalizer, raw):
    once = normalizer.normalize(raw)
    assert normalizer.normalize(once) == once


def test_digits_brought_together_by_joiner_removal(normalizer):
    assert normalizer.normalize("1\u200c 2") == "12"


@pytest.mark.parametrize("value", [None, 42, b"Invoice To"])
def test_non_string_input_is_rejected(normalizer, value):
    with pytest.raises(InvalidTextError):
        normalizer.normalize(value)
    with pytest.raises(TypeError):
        normalizer.normalize(value)


def test_module_level_normalize_text():
    assert normalize_text("J o h n") == "John"
