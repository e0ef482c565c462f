"""Tests for the language table."""

from subtitle_languages import LANGUAGE_TABLE, Language, all_languages, lookup_language


def test_lookup_by_every_key() -> None:
    for key in ("en", "eng", "English", "english", " English "):
        assert lookup_language(key) == Language(alpha3="eng", name="English", alpha2="en")


def test_native_names() -> None:
    assert lookup_language("Deutsch") == lookup_language("German")
    assert lookup_language("español") == lookup_language("spa")
    assert lookup_language("Svenska").tag == "sv"


def test_unknown_returns_none() -> None:
    assert lookup_language("SDH") is None
    assert lookup_language("") is None


def test_tag_prefers_alpha2() -> None:
    assert lookup_language("por").tag == "pt"
    assert lookup_language("yue").tag == "yue"


def test_all_languages_unique_and_sorted() -> None:
    langs = all_languages()
    assert len(langs) == len(LANGUAGE_TABLE)
    names = [lang.name for lang in langs]
    assert names == sorted(names)


def test_covers_iso_639_1() -> None:
    assert sum(1 for entry in LANGUAGE_TABLE if entry[0]) >= 183
    for name, tag in (
        ("Afrikaans", "af"),
        ("Latin", "la"),
        ("Nepali", "ne"),
        ("Somali", "so"),
        ("Amharic", "am"),
    ):
        assert lookup_language(name).tag == tag
        assert lookup_language(tag).name == name
    assert lookup_language("tib") == lookup_language("bod") == lookup_language("Tibetan")
    assert lookup_language("mao").tag == "mi"
