# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-17
# Description: RetailToolSchemas.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, List

from tools.RetailToolCalls import ToolName

RETAIL_TOOLS: List[Dict[str, Any]] = [
    {
        "name": ToolName.SEARCH_PRODUCTS.value,
        "description": "Search for products in the retail database with various filters",
        "parameters": {
            "type": "object",
            "properties": {
                "term": {"type": "string", "description": "Search term for product description or general search"},
                "country": {"type": "string", "description": "Filter by country"},
                "priceMin": {"type": "number", "description": "Minimum price filter"},
                "priceMax": {"type": "number", "description": "Maximum price filter"},
                "dateStart": {"type": "string", "description": "Start date for filtering (YYYY-MM-DD format)"},
                "dateEnd": {"type": "string", "description": "End date for filtering (YYYY-MM-DD format)"},
                "stockCode": {"type": "string", "description": "Specific stock code to search for"},
                "customerId": {"type": "string", "description": "Filter by customer ID"},
                "quantityMin": {"type": "number", "description": "Minimum quantity filter"},
                "quantityMax": {"type": "number", "description": "Maximum quantity filter"},
            },
        },
    },
    {
        "name": ToolName.GET_PRODUCTS_BY_COUNTRY.value,
        "description": "Get all products from a specific country",
        "parameters": {
            "type": "object",
            "properties": {
                "country": {"type": "string", "description": "Country name to filter by"},
            },
            "required": ["country"],
        },
    },
    {
        "name": ToolName.GET_PRICE_RANGE_PRODUCTS.value,
        "description": "Get products within a specific price range",
        "parameters": {
            "type": "object",
            "properties": {
                "minPrice": {"type": "number", "description": "Minimum price"},
                "maxPrice": {"type": "number", "description": "Maximum price"},
            },
        },
    },
    {
        "name": ToolName.GET_TOP_SELLING_PRODUCTS.value,
        "description": "Get the top selling products by quantity",
        "parameters": {
            "type": "object",
            "properties": {
                "limit": {"type": "number", "description": "Number of top products to return (default: 10)"},
            },
        },
    },
    {
        "name": ToolName.GET_PRODUCTS_BY_DATE_RANGE.value,
        "description": "Get products sold within a specific date range",
        "parameters": {
            "type": "object",
            "properties": {
                "startDate": {"type": "string", "description": "Start date (YYYY-MM-DD format)"},
                "endDate": {"type": "string", "description": "End date (YYYY-MM-DD format)"},
            },
        },
    },
    {
        "name": ToolName.VECTOR_SEARCH.value,
        "description": "Perform semantic search using embeddings for more contextual results",
        "parameters": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Natural language query for semantic search"},
            },
            "required": ["query"],
        },
    },
]


def openai_tool_specs() -> List[Dict[str, Any]]:
    """RETAIL_TOOLS in the chat.completions `tools=` shape."""
    return [{"type": "function", "function": tool} for tool in RETAIL_TOOLS]
