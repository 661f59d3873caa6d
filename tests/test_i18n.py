from hexflash.i18n import (
    LANGUAGES, TRANSLATIONS, language_name, placeholder_examples, translate
)


def test_every_language_has_a_table_and_examples():
    for lang in LANGUAGES:
        assert lang in TRANSLATIONS
        assert placeholder_examples(lang)


def test_translate_and_fallbacks():
    assert translate("de", "home") == "Startseite"
    # the Japanese table has no chat strings
    assert translate("ja", "chatTitle") == "Chat with Selected Cards"
    assert translate("xx", "home") == "Home"
    assert translate("en", "noSuchKey") == "noSuchKey"


def test_language_names():
    assert language_name("ko") == "Korean"
    assert language_name("xx") == "English"
