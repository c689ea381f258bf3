"""Tests for localized messages."""

import pytest

from app.infrastructure.messages import (
    CODE_ALLOCATION_FAILED,
    PRODUCT_NOT_FOUND,
    MessageCatalog,
)


class TestMessageCatalog:
    """Tests for MessageCatalog."""

    def test_english(self) -> None:
        """English messages are returned for 'en'."""
        assert MessageCatalog("en").get(PRODUCT_NOT_FOUND) == "Product not found"

    def test_french(self) -> None:
        """French messages are returned for 'fr'."""
        assert MessageCatalog("fr").get(PRODUCT_NOT_FOUND) == "Produit introuvable"

    @pytest.mark.parametrize(("locale", "expected"), [("fr-FR", "fr"), ("fr_CA", "fr"), ("EN", "en"), ("de", "en")])
    def test_locale_resolution(self, locale: str, expected: str) -> None:
        """Regional variants map to their language; unknown ones fall back to English."""
        assert MessageCatalog(locale).locale == expected

    def test_unknown_key_returned_unchanged(self) -> None:
        """Missing keys are shown as-is."""
        assert MessageCatalog("fr").get("no.such.key") == "no.such.key"

    def test_parameters_are_interpolated(self) -> None:
        """Template parameters are filled in."""
        message = MessageCatalog("en").get(CODE_ALLOCATION_FAILED, attempts=5)
        assert "5 attempts" in message

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("fr-FR,fr;q=0.9,en;q=0.8", "fr"),
            ("de-DE, fr;q=0.5", "fr"),
            ("*", "en"),
            ("", "en"),
            (None, "en"),
        ],
    )
    def test_from_accept_language(self, header: str | None, expected: str) -> None:
        """The first supported language of the header wins."""
        assert MessageCatalog.from_accept_language(header).locale == expected
