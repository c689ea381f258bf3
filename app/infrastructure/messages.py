"""Localized user-facing messages.

Maps symbolic message keys to display strings per locale.
"""

from typing import Any

from app.infrastructure.config import settings

PRODUCT_NOT_FOUND = "product.not_found"
IMAGE_NOT_FOUND = "image.not_found"
INVALID_PRICE_RANGE = "search.invalid_price_range"
CODE_ALLOCATION_FAILED = "product.code_allocation_failed"

FALLBACK_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        PRODUCT_NOT_FOUND: "Product not found",
        IMAGE_NOT_FOUND: "Image not found",
        INVALID_PRICE_RANGE: "Invalid price range '{value}', expected '<min>-<max>'",
        CODE_ALLOCATION_FAILED: "Could not allocate a unique product code after {attempts} attempts",
    },
    "fr": {
        PRODUCT_NOT_FOUND: "Produit introuvable",
        IMAGE_NOT_FOUND: "Image introuvable",
        INVALID_PRICE_RANGE: "Plage de prix invalide '{value}', format attendu '<min>-<max>'",
        CODE_ALLOCATION_FAILED: "Impossible d'attribuer un code produit unique après {attempts} tentatives",
    },
}


class MessageCatalog:
    """Message lookup for a single locale.

    Unknown locales fall back to English, and unknown keys are returned
    unchanged.

    Example usage:
        messages = MessageCatalog("fr")
        messages.get(PRODUCT_NOT_FOUND)  # "Produit introuvable"
    """

    def __init__(self, locale: str | None = None) -> None:
        """Initialize catalog.

        Args:
            locale: Locale code (e.g. "en", "fr-FR"). Defaults to
                ``settings.default_locale``.
        """
        self.locale = self.resolve_locale(locale or settings.default_locale)

    @staticmethod
    def resolve_locale(locale: str) -> str:
        """Normalize a locale code to a supported one."""
        language = locale.replace("_", "-").split("-")[0].strip().lower()
        return language if language in MESSAGES else FALLBACK_LOCALE

    @classmethod
    def from_accept_language(cls, header: str | None) -> "MessageCatalog":
        """Pick the first supported language from an Accept-Language header.

        Quality values are ignored; entries are taken in header order.
        """
        if header:
            for part in header.split(","):
                tag = part.split(";")[0].strip()
                if not tag or tag == "*":
                    continue
                language = tag.split("-")[0].lower()
                if language in MESSAGES:
                    return cls(language)
        return cls()

    def get(self, key: str, **params: Any) -> str:
        """Get display string for a message key.

        Args:
            key: Symbolic message key.
            **params: Values interpolated into the template.

        Returns:
            Localized message.
        """
        template = MESSAGES[self.locale].get(key) or MESSAGES[FALLBACK_LOCALE].get(key, key)
        return template.format(**params) if params else template
