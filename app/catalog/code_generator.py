"""Sequential product code generation.

Codes look like ``PRODUCT001``: a fixed prefix followed by a counter
zero-padded to a minimum width.
"""

import re

import structlog

from app.catalog.repository import ProductRepository
from app.infrastructure.config import settings

logger = structlog.get_logger()

_NON_DIGITS = re.compile(r"\D+")


def extract_counter(code: str) -> int:
    """Get the numeric part of a code.

    Every non-digit character is dropped; a code with no digits counts as 0.
    """
    digits = _NON_DIGITS.sub("", code)
    return int(digits) if digits else 0


def format_code(counter: int, prefix: str | None = None, width: int | None = None) -> str:
    """Format a counter as a product code (e.g. 7 -> ``PRODUCT007``)."""
    prefix = settings.code_prefix if prefix is None else prefix
    width = settings.code_width if width is None else width
    return f"{prefix}{counter:0{width}d}"


class CodeGenerator:
    """Derives the next unused product code from storage.

    The last code by descending order is only a starting point: the
    candidate is incremented until no stored product carries it.

    Example usage:
        generator = CodeGenerator(ProductRepository(session))
        code = await generator.next_code()  # "PRODUCT001" on an empty store
    """

    def __init__(
        self,
        repository: ProductRepository,
        prefix: str | None = None,
        width: int | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            repository: Product repository.
            prefix: Code prefix. Defaults to ``settings.code_prefix``.
            width: Minimum counter width. Defaults to ``settings.code_width``.
        """
        self.repository = repository
        self.prefix = settings.code_prefix if prefix is None else prefix
        self.width = settings.code_width if width is None else width

    async def next_code(self) -> str:
        """Get the next code not present in storage.

        Returns:
            A code string such as ``PRODUCT008``.
        """
        last_code = await self.repository.find_last_code()
        counter = extract_counter(last_code) + 1 if last_code is not None else 1

        code = format_code(counter, self.prefix, self.width)
        while await self.repository.exists_by_code(code):
            logger.debug("Product code taken, trying next", code=code)
            counter += 1
            code = format_code(counter, self.prefix, self.width)

        return code
