"""Tests for the translation catalog."""

from sitehealth.i18n import DEFAULT_CATALOG, Translator


class TestTranslator:
    def test_known_key(self, translator: Translator) -> None:
        assert translator.translate("COM_HEALTHCHECKER_CATEGORY_SEO") == "SEO"
        assert translator("COM_HEALTHCHECKER_STATUS_GOOD") == "Good"

    def test_unknown_key_is_returned_unchanged(self, translator: Translator) -> None:
        assert translator.translate("Plain label") == "Plain label"
        assert not translator.has("Plain label")

    def test_format(self, translator: Translator) -> None:
        assert translator.format("COM_HEALTHCHECKER_CHECK_ERROR", "boom") == "Check error: boom"
        assert translator.format("COM_HEALTHCHECKER_CHECK_TIMEOUT", 5) == (
            "Check did not finish within 5 seconds."
        )

    def test_format_with_mismatched_arguments(self, translator: Translator) -> None:
        assert translator.format("COM_HEALTHCHECKER_STATUS_GOOD", "extra") == "Good extra"
        assert translator.format("COM_HEALTHCHECKER_STATUS_GOOD") == "Good"

    def test_load_merges_and_overrides(self, translator: Translator) -> None:
        translator.load({"PLG_X_LABEL": "X", "COM_HEALTHCHECKER_CATEGORY_SEO": "Search"})

        assert translator("PLG_X_LABEL") == "X"
        assert translator("COM_HEALTHCHECKER_CATEGORY_SEO") == "Search"
        assert DEFAULT_CATALOG["COM_HEALTHCHECKER_CATEGORY_SEO"] == "SEO"

    def test_instances_are_independent(self) -> None:
        first = Translator({"PLG_ONLY_FIRST": "yes"})
        second = Translator()
        assert first.has("PLG_ONLY_FIRST")
        assert not second.has("PLG_ONLY_FIRST")
