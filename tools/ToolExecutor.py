# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-18
# Updated: 2026-10-04
# Description: ToolExecutor.py
# -----------------------------------------------------------------------------
import logging
import threading
from typing import Any, Callable, Dict, List, Sequence

from searchindex.RetailIndexAdapter import RetailIndexAdapter
from searchindex.SearchTypes import DateRange, NumericRange, RetailSearchParams, SearchHit
from tools.RetailToolCalls import (
    CountryArgs,
    DateRangeArgs,
    DisplayData,
    PriceRangeArgs,
    SearchProductsArgs,
    ToolCall,
    ToolInvocation,
    ToolName,
    ToolResult,
    TopSellingArgs,
    VectorSearchArgs,
    resolve_tool_call,
)
from utility.errors import RetailChatError, ToolExecutionError
from utility.logging_utils import get_class_logger

DEFAULT_TOP_SELLING_LIMIT = 10


def _project(hits: Sequence[SearchHit], fields: Sequence[str], score_key: str | None = None) -> List[Dict[str, Any]]:
    """Flatten hits into display rows with the given document fields."""
    rows: List[Dict[str, Any]] = []
    for hit in hits:
        row = {f: hit.document.get(f) for f in fields}
        if score_key:
            row[score_key] = hit.score
        rows.append(row)
    return rows


def _range(low, high, cls):
    if low is None and high is None:
        return None
    return cls(low, high)


class ToolExecutor:
    """
    Runs LLM tool calls against one RetailIndexAdapter.

    execute_tool never raises: failures come back as a text-typed
    "Tool Execution Error" result so the conversation can continue.
    """

    def __init__(self, adapter: RetailIndexAdapter, *, logger: logging.Logger | None = None) -> None:
        self.adapter = adapter
        self.logger = logger or get_class_logger(self.__class__)
        self._init_lock = threading.Lock()
        self._handlers: Dict[ToolName, Callable[[ToolInvocation], ToolResult]] = {
            ToolName.SEARCH_PRODUCTS: self._search_products,
            ToolName.GET_PRODUCTS_BY_COUNTRY: self._get_products_by_country,
            ToolName.GET_PRICE_RANGE_PRODUCTS: self._get_price_range_products,
            ToolName.GET_TOP_SELLING_PRODUCTS: self._get_top_selling_products,
            ToolName.GET_PRODUCTS_BY_DATE_RANGE: self._get_products_by_date_range,
            ToolName.VECTOR_SEARCH: self._vector_search,
        }

    @property
    def is_initialized(self) -> bool:
        return self.adapter.is_initialized

    def initialize(self) -> None:
        with self._init_lock:
            if self.adapter.is_initialized:
                self.logger.debug("Search index already initialised")
                return
            try:
                self.adapter.initialize()
            except Exception as e:
                self.logger.error("Failed to initialise search index: %s", e)
                raise
            self.logger.info("Search index initialised for account '%s'", self.adapter.account_id)

    def execute_tool(self, tool_call: ToolCall) -> ToolResult:
        self.logger.info("execute_tool name=%s id=%s", tool_call.name, tool_call.id)
        try:
            if not self.adapter.is_initialized:
                self.initialize()

            invocation = resolve_tool_call(tool_call)
            return self._handlers[invocation.name](invocation)

        except Exception as e:
            error = e if isinstance(e, RetailChatError) else ToolExecutionError(str(e))
            self.logger.error("Error executing tool %s: %s", tool_call.name, error, exc_info=True)
            return ToolResult(
                tool_call_id=tool_call.id,
                result={"error": f"Error executing {tool_call.name}: {error}"},
                display_data=DisplayData(
                    type="text",
                    data=f"Error: {error}",
                    title="Tool Execution Error",
                ),
            )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _search_products(self, inv: ToolInvocation) -> ToolResult:
        args: SearchProductsArgs = inv.args
        params = RetailSearchParams(
            term=args.term,
            country=args.country,
            stock_code=args.stockCode,
            customer_id=args.customerId,
            price_range=_range(args.priceMin, args.priceMax, NumericRange),
            date_range=_range(args.dateStart, args.dateEnd, DateRange),
            quantity_range=_range(args.quantityMin, args.quantityMax, NumericRange),
        )
        results = self.adapter.search_products(params)
        self.logger.debug("search_products term=%r count=%d", args.term, results.count)

        products = _project(
            results.hits,
            ("stockCode", "description", "price", "quantity", "country", "invoiceDate", "customerId"),
            score_key="score",
        )
        return ToolResult(
            tool_call_id=inv.id,
            result={"count": results.count, "products": products, "elapsed": results.elapsed},
            display_data=DisplayData(
                type="table",
                data=products,
                title=f"Search Results ({results.count} found)",
            ),
        )

    def _get_products_by_country(self, inv: ToolInvocation) -> ToolResult:
        args: CountryArgs = inv.args
        results = self.adapter.get_products_by_country(args.country)

        products = _project(
            results.hits,
            ("stockCode", "description", "price", "quantity", "invoiceDate", "customerId"),
        )
        return ToolResult(
            tool_call_id=inv.id,
            result={"country": args.country, "products": products},
            display_data=DisplayData(
                type="table",
                data=products,
                title=f"Products from {args.country} ({len(products)} found)",
            ),
        )

    def _get_price_range_products(self, inv: ToolInvocation) -> ToolResult:
        args: PriceRangeArgs = inv.args
        results = self.adapter.get_products_by_price_range(args.minPrice, args.maxPrice)

        products = _project(
            results.hits,
            ("stockCode", "description", "price", "quantity", "country", "invoiceDate"),
        )
        low = args.minPrice if args.minPrice is not None else 0
        high = args.maxPrice if args.maxPrice is not None else "∞"
        return ToolResult(
            tool_call_id=inv.id,
            result={"priceRange": {"min": args.minPrice, "max": args.maxPrice}, "products": products},
            display_data=DisplayData(
                type="table",
                data=products,
                title=f"Products in Price Range ${low} - ${high}",
            ),
        )

    def _get_top_selling_products(self, inv: ToolInvocation) -> ToolResult:
        args: TopSellingArgs = inv.args
        limit = args.limit or DEFAULT_TOP_SELLING_LIMIT
        top_products = self.adapter.get_top_selling_products(limit)

        return ToolResult(
            tool_call_id=inv.id,
            result={"topProducts": top_products},
            display_data=DisplayData(
                type="table",
                data=top_products,
                title=f"Top {limit} Selling Products",
            ),
        )

    def _get_products_by_date_range(self, inv: ToolInvocation) -> ToolResult:
        args: DateRangeArgs = inv.args
        results = self.adapter.get_products_by_date_range(args.startDate, args.endDate)

        products = _project(
            results.hits,
            ("stockCode", "description", "price", "quantity", "country", "invoiceDate", "customerId"),
        )
        return ToolResult(
            tool_call_id=inv.id,
            result={"dateRange": {"start": args.startDate, "end": args.endDate}, "products": products},
            display_data=DisplayData(
                type="table",
                data=products,
                title=f"Products from {args.startDate or 'the beginning'} to {args.endDate or 'today'}",
            ),
        )

    def _vector_search(self, inv: ToolInvocation) -> ToolResult:
        args: VectorSearchArgs = inv.args
        results = self.adapter.vector_search(args.query)

        products = _project(
            results.hits,
            ("stockCode", "description", "price", "quantity", "country", "invoiceDate"),
            score_key="relevanceScore",
        )
        return ToolResult(
            tool_call_id=inv.id,
            result={"query": args.query, "products": products},
            display_data=DisplayData(
                type="table",
                data=products,
                title=f'Semantic Search Results for "{args.query}"',
            ),
        )
