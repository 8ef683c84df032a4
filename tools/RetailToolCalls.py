# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-17
# Description: RetailToolCalls.py
# -----------------------------------------------------------------------------
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from utility.errors import UnknownToolError

DisplayType = Literal["table", "chart", "text", "list"]


class ToolName(str, Enum):
    SEARCH_PRODUCTS = "search_products"
    GET_PRODUCTS_BY_COUNTRY = "get_products_by_country"
    GET_PRICE_RANGE_PRODUCTS = "get_price_range_products"
    GET_TOP_SELLING_PRODUCTS = "get_top_selling_products"
    GET_PRODUCTS_BY_DATE_RANGE = "get_products_by_date_range"
    VECTOR_SEARCH = "vector_search"


# ---------------------------------------------------------------------------
# Per-tool argument models (field names match the LLM-facing JSON schemas)
# ---------------------------------------------------------------------------
class _ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SearchProductsArgs(_ToolArgs):
    term: Optional[str] = None
    country: Optional[str] = None
    priceMin: Optional[float] = None
    priceMax: Optional[float] = None
    dateStart: Optional[str] = None
    dateEnd: Optional[str] = None
    stockCode: Optional[str] = None
    customerId: Optional[str] = None
    quantityMin: Optional[float] = None
    quantityMax: Optional[float] = None


class CountryArgs(_ToolArgs):
    country: str = Field(..., min_length=1)


class PriceRangeArgs(_ToolArgs):
    minPrice: Optional[float] = None
    maxPrice: Optional[float] = None


class TopSellingArgs(_ToolArgs):
    limit: Optional[int] = None


class DateRangeArgs(_ToolArgs):
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class VectorSearchArgs(_ToolArgs):
    query: str = Field(..., min_length=1)


TOOL_ARGUMENTS: Dict[ToolName, Type[_ToolArgs]] = {
    ToolName.SEARCH_PRODUCTS: SearchProductsArgs,
    ToolName.GET_PRODUCTS_BY_COUNTRY: CountryArgs,
    ToolName.GET_PRICE_RANGE_PRODUCTS: PriceRangeArgs,
    ToolName.GET_TOP_SELLING_PRODUCTS: TopSellingArgs,
    ToolName.GET_PRODUCTS_BY_DATE_RANGE: DateRangeArgs,
    ToolName.VECTOR_SEARCH: VectorSearchArgs,
}


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolCall:
    """Raw request from the LLM. parameters may still be a JSON string."""
    name: str
    parameters: Union[Dict[str, Any], str, None]
    id: str


@dataclass(frozen=True)
class ToolInvocation:
    """A ToolCall resolved to its enum variant and typed arguments."""
    name: ToolName
    args: _ToolArgs
    id: str


@dataclass(frozen=True)
class DisplayData:
    type: DisplayType
    data: Any
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "data": self.data, "title": self.title}


@dataclass(frozen=True)
class ToolResult:
    tool_call_id: str
    result: Any
    display_data: Optional[DisplayData] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "toolCallId": self.tool_call_id,
            "result": self.result,
            "displayData": self.display_data.to_dict() if self.display_data else None,
        }


def resolve_tool_call(call: ToolCall) -> ToolInvocation:
    """
    Raises UnknownToolError for names outside ToolName,
    json.JSONDecodeError / pydantic.ValidationError for bad arguments.
    """
    try:
        name = ToolName(call.name)
    except ValueError:
        raise UnknownToolError(call.name) from None

    params = call.parameters
    if isinstance(params, str):
        params = json.loads(params) if params.strip() else {}
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise ValueError(f"Tool arguments must be a JSON object, got {type(params).__name__}")

    args = TOOL_ARGUMENTS[name].model_validate(params)
    return ToolInvocation(name=name, args=args, id=call.id)
