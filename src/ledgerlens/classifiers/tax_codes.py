"""Keyword-driven tax category and tax code matching."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..core.models import TaxCategory
from ..errors import with_timeout
from ..storage import StorageService

logger = logging.getLogger(__name__)


# Matching order is significant: the first category with a keyword hit wins.
CATEGORY_KEYWORDS: tuple[tuple[TaxCategory, tuple[str, ...]], ...] = (
    (TaxCategory.TRANSPORTATION, ("fuel", "car", "vehicle", "mileage", "parking", "toll")),
    (TaxCategory.OFFICE, ("supplies", "paper", "printer", "desk", "chair", "computer")),
    (TaxCategory.MARKETING, ("advertising", "promotion", "campaign", "marketing")),
    (TaxCategory.TRAVEL, ("hotel", "flight", "accommodation", "travel")),
    (TaxCategory.EQUIPMENT, ("machine", "equipment", "tool", "hardware")),
    (TaxCategory.SERVICES, ("consulting", "service", "subscription", "software")),
)


def match_category(description: str) -> TaxCategory | None:
    """
    Find the first category whose keywords occur in the description.

    Returns:
        The matched category, or None when no keyword matches
    """
    lowered = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return None


@dataclass(frozen=True)
class TaxCodeMatch:
    """Outcome of matching one description."""

    category: TaxCategory | None = None
    tax_code_id: str | None = None

    @property
    def has_code(self) -> bool:
        return self.tax_code_id is not None


class TaxCodeMatcher:
    """
    Resolve descriptions to tax codes through the ``tax_codes`` table.

    A matcher lives for one analysis run; category lookups are cached
    for that run only.
    """

    TABLE = "tax_codes"

    def __init__(self, storage: StorageService, timeout_seconds: float = 10.0):
        self.storage = storage
        self.timeout_seconds = timeout_seconds
        self._codes: dict[TaxCategory, str | None] = {}

    async def find_tax_code(self, description: str, amount: Decimal | None = None) -> TaxCodeMatch:
        """
        Match a description to a category and resolve its tax code.

        Args:
            description: Free-text description
            amount: Positive amount; accepted for future threshold rules, unused

        Returns:
            TaxCodeMatch; both fields are None when no keyword matches and
            tax_code_id is None when the taxonomy has no single row
        """
        category = match_category(description)
        if category is None:
            return TaxCodeMatch()

        if category not in self._codes:
            self._codes[category] = await self._lookup(category)

        return TaxCodeMatch(category=category, tax_code_id=self._codes[category])

    async def _lookup(self, category: TaxCategory) -> str | None:
        rows = await with_timeout(
            self.storage.select(self.TABLE, {"expense_category": category.value}, limit=2),
            self.timeout_seconds,
            f"tax code lookup for {category.value}",
        )
        if len(rows) != 1:
            logger.warning(
                f"Expected one tax code for category {category.value}, found {len(rows)}"
            )
            return None
        return str(rows[0]["id"])
