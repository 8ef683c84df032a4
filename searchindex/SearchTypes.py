# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: SearchTypes.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import settings


def retail_index_schema(embedding_dimensions: int = settings.EMBEDDING_DIMENSIONS) -> Dict[str, str]:
    """Fixed search document schema for retail transaction lines."""
    return {
        "invoice": "string",
        "stockCode": "string",
        "description": "string",
        "quantity": "number",
        "invoiceDate": "string",
        "price": "number",
        "customerId": "string",
        "country": "string",
        "embeddings": f"vector[{embedding_dimensions}]",
    }


@dataclass(frozen=True)
class SearchHit:
    id: str
    score: float
    document: Dict[str, Any]


@dataclass
class SearchResults:
    count: int
    hits: List[SearchHit]
    elapsed: Dict[str, Any] = field(default_factory=dict)

    def with_hits(self, hits: List[SearchHit]) -> "SearchResults":
        """Copy with a replaced hit list; count follows the new list."""
        return replace(self, hits=hits, count=len(hits))


@dataclass(frozen=True)
class NumericRange:
    min: Optional[float] = None
    max: Optional[float] = None

    def contains(self, value: Any) -> bool:
        if not isinstance(value, (int, float)):
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


@dataclass(frozen=True)
class DateRange:
    start: Optional[str] = None  # ISO date or datetime
    end: Optional[str] = None


@dataclass(frozen=True)
class RetailSearchParams:
    """
    Text fields are concatenated into one search term. Ranges and the
    identifier fields (country, stock code, customer, invoice) are also
    applied as post-filters; description and term are not.
    """
    term: Optional[str] = None
    description: Optional[str] = None
    stock_code: Optional[str] = None
    country: Optional[str] = None
    invoice: Optional[str] = None
    customer_id: Optional[str] = None
    price_range: Optional[NumericRange] = None
    quantity_range: Optional[NumericRange] = None
    date_range: Optional[DateRange] = None

    def search_term(self) -> str:
        parts = [
            self.term,
            self.description,
            self.stock_code,
            self.country,
            self.invoice,
            self.customer_id,
        ]
        joined = " ".join(p.strip() for p in parts if p and p.strip())
        return joined or "*"
