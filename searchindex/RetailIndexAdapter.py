# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-15
# Updated: 2026-10-03
# Description: RetailIndexAdapter.py
# -----------------------------------------------------------------------------
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

import settings
from persistence.RetailDatabase import RetailDatabase
from searchindex.RetailSearchIndex import RetailSearchIndex
from searchindex.SearchTypes import (
    DateRange,
    NumericRange,
    RetailSearchParams,
    SearchHit,
    SearchResults,
    retail_index_schema,
)
from utility.errors import EmbeddingError, NotFoundError
from utility.logging_utils import get_class_logger


class TextEmbedder(Protocol):
    def embed_text(self, text: str) -> Optional[List[float]]:
        ...


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO date/datetime -> naive UTC datetime. None when unparseable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_bound(value: Optional[str], *, end: bool) -> Optional[datetime]:
    if value is None or not str(value).strip():
        return None
    parsed = _parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    # A bare end date covers the whole day
    if end and len(str(value).strip()) == 10:
        parsed = parsed + timedelta(days=1) - timedelta(microseconds=1)
    return parsed


def _contains(field: str, needle: str) -> Callable[[SearchHit], bool]:
    lowered = needle.lower()
    return lambda hit: lowered in str(hit.document.get(field) or "").lower()


class RetailIndexAdapter:
    """
    Single point of access to one account's search index.

    - initialize() restores the persisted index or creates (and persists) an empty one
    - query helpers run one broad index search and post-filter the hits in memory
    - insert() re-persists the whole index after every document

    Query methods require initialize() to have completed.
    """

    def __init__(
            self,
            account_id: str,
            *,
            database: RetailDatabase,
            embedder: Optional[TextEmbedder] = None,
            embedding_dimensions: int = settings.EMBEDDING_DIMENSIONS,
            logger: logging.Logger | None = None,
    ) -> None:
        self.account_id = account_id
        self.database = database
        self.embedder = embedder
        self.embedding_dimensions = embedding_dimensions
        self.logger = logger or get_class_logger(self.__class__)
        self._index: Optional[RetailSearchIndex] = None

    @property
    def index(self) -> RetailSearchIndex:
        if self._index is None:
            raise RuntimeError(f"Search index for account '{self.account_id}' is not initialised")
        return self._index

    @property
    def is_initialized(self) -> bool:
        return self._index is not None

    # ------------------------------------------------------------------
    # Lifecycle / persistence
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        with self.database.session() as session:
            account = self.database.get_account(session, self.account_id)
            if account is None:
                raise NotFoundError(f"Account '{self.account_id}' not found")
            blob = account.search_index

        if blob:
            self._index = RetailSearchIndex.restore(blob)
            self.logger.info(
                "Restored search index for account '%s' (%d documents)",
                self.account_id,
                self._index.count,
            )
            return

        self._index = RetailSearchIndex.create(retail_index_schema(self.embedding_dimensions))
        self.logger.info("Created empty search index for account '%s'", self.account_id)
        self.save_index()

    def save_index(self) -> None:
        blob = self.index.persist()
        with self.database.session() as session:
            account = self.database.get_account(session, self.account_id)
            if account is None:
                raise NotFoundError(f"Account '{self.account_id}' not found")
            account.search_index = blob
        self.logger.debug("Saved search index for account '%s' (%d documents)", self.account_id, self.index.count)

    def insert(self, document: Mapping[str, Any]) -> str:
        doc_id = self.index.insert(document)
        self.save_index()
        return doc_id

    # ------------------------------------------------------------------
    # Plain searches
    # ------------------------------------------------------------------
    def search(self, term: str) -> SearchResults:
        return self.index.search(term)

    def vector_search(self, term: str) -> SearchResults:
        if self.embedder is None:
            raise EmbeddingError("No embedder configured for vector search")

        embeddings = self.embedder.embed_text(term)
        if not embeddings:
            raise EmbeddingError("Failed to get embeddings")

        results = self.index.search(
            term,
            mode="hybrid",
            vector=embeddings,
            vector_property="embeddings",
            similarity=settings.VECTOR_SIMILARITY,
            limit=settings.VECTOR_SEARCH_LIMIT,
        )
        self.logger.info("vector_search term=%r hits=%d", term, len(results.hits))
        return results

    # ------------------------------------------------------------------
    # Filtered searches
    # ------------------------------------------------------------------
    def search_products(self, params: RetailSearchParams) -> SearchResults:
        search_term = params.search_term()
        results = self.index.search(search_term, limit=settings.PRODUCT_SEARCH_LIMIT)

        predicates: List[Callable[[SearchHit], bool]] = []

        if params.price_range is not None:
            price_range = params.price_range
            predicates.append(lambda hit: price_range.contains(hit.document.get("price")))

        if params.quantity_range is not None:
            quantity_range = params.quantity_range
            predicates.append(lambda hit: quantity_range.contains(hit.document.get("quantity")))

        if params.date_range is not None:
            predicates.append(self._date_predicate(params.date_range))

        if params.country:
            predicates.append(_contains("country", params.country))

        if params.stock_code:
            predicates.append(_contains("stockCode", params.stock_code))

        if params.customer_id:
            predicates.append(_contains("customerId", params.customer_id))

        if params.invoice:
            predicates.append(_contains("invoice", params.invoice))

        hits = results.hits
        for predicate in predicates:
            hits = [hit for hit in hits if predicate(hit)]

        self.logger.info(
            "search_products term=%r fetched=%d filters=%d kept=%d",
            search_term,
            len(results.hits),
            len(predicates),
            len(hits),
        )
        return results.with_hits(hits)

    @staticmethod
    def _date_predicate(date_range: DateRange) -> Callable[[SearchHit], bool]:
        start = _parse_bound(date_range.start, end=False)
        end = _parse_bound(date_range.end, end=True)

        def predicate(hit: SearchHit) -> bool:
            when = _parse_timestamp(hit.document.get("invoiceDate"))
            if when is None:
                return False
            return (start is None or when >= start) and (end is None or when <= end)

        return predicate

    def get_products_by_country(self, country: str) -> SearchResults:
        return self.search_products(RetailSearchParams(country=country))

    def get_products_by_price_range(self, min_price: Optional[float] = None, max_price: Optional[float] = None) -> SearchResults:
        return self.search_products(RetailSearchParams(price_range=NumericRange(min=min_price, max=max_price)))

    def get_products_by_date_range(self, start: Optional[str] = None, end: Optional[str] = None) -> SearchResults:
        return self.search_products(RetailSearchParams(date_range=DateRange(start=start, end=end)))

    def get_products_by_invoice(self, invoice: str) -> SearchResults:
        return self.search_products(RetailSearchParams(invoice=invoice))

    def get_products_by_customer(self, customer_id: str) -> SearchResults:
        return self.search_products(RetailSearchParams(customer_id=customer_id))

    def get_products_by_stock_code(self, stock_code: str) -> SearchResults:
        return self.search_products(RetailSearchParams(stock_code=stock_code))

    def get_recent_sales(self, days: int = 30, *, today: Optional[date] = None) -> SearchResults:
        end_date = today or date.today()
        start_date = end_date - timedelta(days=days)
        return self.get_products_by_date_range(start_date.isoformat(), end_date.isoformat())

    # ------------------------------------------------------------------
    # Aggregations (bounded scans, not full-dataset)
    # ------------------------------------------------------------------
    def get_top_selling_products(self, limit: int = 10) -> List[Dict[str, Any]]:
        results = self.index.search("*", limit=settings.TOP_SELLING_SCAN_LIMIT)

        groups: Dict[tuple, Dict[str, Any]] = {}
        for hit in results.hits:
            doc = hit.document
            price = doc.get("price") or 0
            quantity = doc.get("quantity") or 0
            key = (doc.get("stockCode"), doc.get("description"))

            group = groups.get(key)
            if group is None:
                group = {
                    "stockCode": doc.get("stockCode"),
                    "description": doc.get("description"),
                    "totalQuantity": 0,
                    "count": 0,
                    "averagePrice": 0.0,
                    "totalRevenue": 0.0,
                    "countries": [],
                    "_price_sum": 0.0,
                }
                groups[key] = group

            group["totalQuantity"] += quantity
            group["count"] += 1
            group["totalRevenue"] += price * quantity
            group["_price_sum"] += price
            country = doc.get("country")
            if country and country not in group["countries"]:
                group["countries"].append(country)

        products = []
        for group in groups.values():
            price_sum = group.pop("_price_sum")
            group["averagePrice"] = price_sum / group["count"]
            products.append(group)

        products.sort(key=lambda g: g["totalQuantity"], reverse=True)
        top = products[:max(limit, 0)]

        self.logger.info(
            "get_top_selling_products scanned=%d groups=%d returned=%d",
            len(results.hits),
            len(products),
            len(top),
        )
        return top

    def get_product_statistics(self) -> Dict[str, Any]:
        results = self.index.search("*", limit=settings.STATISTICS_SCAN_LIMIT)

        countries: Dict[str, None] = {}
        customers: Dict[str, None] = {}
        stock_codes: Dict[str, None] = {}
        total_revenue = 0.0
        total_quantity = 0
        price_min: Optional[float] = None
        price_max: Optional[float] = None
        date_min: Optional[str] = None
        date_max: Optional[str] = None

        for hit in results.hits:
            doc = hit.document
            price = doc.get("price") or 0
            quantity = doc.get("quantity") or 0

            countries.setdefault(doc.get("country"), None)
            customers.setdefault(doc.get("customerId"), None)
            stock_codes.setdefault(doc.get("stockCode"), None)
            total_revenue += price * quantity
            total_quantity += quantity

            price_min = price if price_min is None else min(price_min, price)
            price_max = price if price_max is None else max(price_max, price)

            invoice_date = doc.get("invoiceDate")
            if invoice_date:
                if date_min is None or invoice_date < date_min:
                    date_min = invoice_date
                if date_max is None or invoice_date > date_max:
                    date_max = invoice_date

        return {
            "totalProducts": results.count,
            "scannedProducts": len(results.hits),
            "uniqueCountries": list(countries),
            "uniqueCustomers": list(customers),
            "uniqueStockCodes": list(stock_codes),
            "totalRevenue": total_revenue,
            "totalQuantity": total_quantity,
            "priceRange": {"min": price_min, "max": price_max},
            "dateRange": {"min": date_min, "max": date_max},
        }
