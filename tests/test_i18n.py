import pytest

from app.i18n import FALLBACK_SUGGESTION_KEYS, UI_TEXT, get_text, is_rtl


@pytest.mark.parametrize(
    "language, expected",
    [("en", "Search Summary"), ("ar", "ملخص البحث"), ("fr", "Résumé de la Recherche")],
)
def test_localized_text(language, expected):
    assert get_text(language, "searchSummary") == expected


def test_unknown_language_falls_back_to_english():
    assert get_text("de", "goBack") == "Go Back"


def test_missing_translation_falls_back_to_english():
    assert "fallbackBrowse" not in UI_TEXT["fr"]
    assert get_text("fr", "fallbackBrowse") == UI_TEXT["en"]["fallbackBrowse"]


def test_unknown_key_returns_key():
    assert get_text("en", "doesNotExist") == "doesNotExist"


def test_placeholders_are_filled():
    assert get_text("en", "matchesFound", count=4).startswith(
        "Based on your preferences, our AI has found 4 properties"
    )
    assert get_text("fr", "step", step=2, total=3) == "Étape 2 sur 3"


def test_fallback_suggestions_exist_in_english():
    for key in FALLBACK_SUGGESTION_KEYS:
        assert key in UI_TEXT["en"]


def test_only_arabic_is_right_to_left():
    assert is_rtl("ar")
    assert not is_rtl("en")
    assert not is_rtl("fr")
