"""Tax code matching and write-off classification."""

from .tax_codes import CATEGORY_KEYWORDS, TaxCodeMatch, TaxCodeMatcher, match_category
from .write_offs import ClassificationOutcome, WriteOffClassifier, format_amount

__all__ = [
    "CATEGORY_KEYWORDS",
    "ClassificationOutcome",
    "TaxCodeMatch",
    "TaxCodeMatcher",
    "WriteOffClassifier",
    "format_amount",
    "match_category",
]
