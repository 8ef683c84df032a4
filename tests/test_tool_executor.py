# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-28
# Description: test_tool_executor.py
# -----------------------------------------------------------------------------
import pytest

from conftest import FAKE_DIMENSIONS, SAMPLE_DOCS
from searchindex.RetailIndexAdapter import RetailIndexAdapter
from tools.RetailToolCalls import ToolCall, ToolName, resolve_tool_call
from tools.RetailToolSchemas import RETAIL_TOOLS, openai_tool_specs
from tools.ToolExecutor import ToolExecutor
from utility.errors import UnknownToolError


@pytest.fixture
def executor(adapter) -> ToolExecutor:
    return ToolExecutor(adapter)


def _call(name, parameters=None, call_id="call_1") -> ToolCall:
    return ToolCall(name=name, parameters=parameters, id=call_id)


def test_tool_schemas_cover_every_tool_name():
    names = {tool["name"] for tool in RETAIL_TOOLS}
    assert names == {t.value for t in ToolName}

    specs = openai_tool_specs()
    assert all(spec["type"] == "function" for spec in specs)
    assert {spec["function"]["name"] for spec in specs} == names


def test_resolve_tool_call_decodes_json_string_arguments():
    inv = resolve_tool_call(_call("get_products_by_country", '{"country": "France", "extra": 1}'))
    assert inv.name is ToolName.GET_PRODUCTS_BY_COUNTRY
    assert inv.args.country == "France"


def test_resolve_tool_call_rejects_unknown_name():
    with pytest.raises(UnknownToolError, match="Unknown tool: drop_tables"):
        resolve_tool_call(_call("drop_tables"))


def test_unknown_tool_returns_text_error_result(executor):
    result = executor.execute_tool(_call("drop_tables", {}, "call_9"))

    assert result.tool_call_id == "call_9"
    assert "Unknown tool: drop_tables" in result.result["error"]
    assert result.display_data.type == "text"
    assert result.display_data.title == "Tool Execution Error"
    assert result.display_data.data.startswith("Error: ")


def test_get_products_by_country(executor):
    result = executor.execute_tool(_call("get_products_by_country", '{"country": "France"}'))

    assert result.result["country"] == "France"
    assert len(result.result["products"]) == 2
    assert set(result.result["products"][0]) == {
        "stockCode", "description", "price", "quantity", "invoiceDate", "customerId",
    }
    assert result.display_data.type == "table"
    assert result.display_data.title == "Products from France (2 found)"


def test_search_products_with_filters(executor):
    result = executor.execute_tool(_call("search_products", {"priceMin": 2, "priceMax": 7, "country": "United Kingdom"}))

    payload = result.result
    assert payload["count"] == 3
    assert all("score" in p for p in payload["products"])
    assert "raw" in payload["elapsed"]
    assert result.display_data.title == "Search Results (3 found)"


def test_price_range_title_defaults(executor):
    result = executor.execute_tool(_call("get_price_range_products", {"maxPrice": 1.5}))

    assert result.result["priceRange"] == {"min": None, "max": 1.5}
    assert len(result.result["products"]) == 2
    assert result.display_data.title == "Products in Price Range $0 - $1.5"

    open_ended = executor.execute_tool(_call("get_price_range_products", {}))
    assert open_ended.display_data.title == "Products in Price Range $0 - $∞"


def test_top_selling_defaults_to_ten(executor):
    result = executor.execute_tool(_call("get_top_selling_products"))

    assert result.display_data.title == "Top 10 Selling Products"
    assert result.result["topProducts"][0]["stockCode"] == "84879"


def test_top_selling_respects_limit(executor):
    result = executor.execute_tool(_call("get_top_selling_products", {"limit": 1}))
    assert len(result.result["topProducts"]) == 1
    assert result.display_data.title == "Top 1 Selling Products"


def test_date_range_tool(executor):
    result = executor.execute_tool(_call("get_products_by_date_range", {"startDate": "2010-01-01"}))

    assert len(result.result["products"]) == 1
    assert result.display_data.title == "Products from 2010-01-01 to today"


def test_invalid_date_becomes_error_result(executor):
    result = executor.execute_tool(_call("get_products_by_date_range", {"startDate": "yesterday-ish"}))
    assert "error" in result.result
    assert result.display_data.type == "text"


def test_vector_search_tool(executor):
    result = executor.execute_tool(_call("vector_search", {"query": "strawberry"}))

    products = result.result["products"]
    assert result.result["query"] == "strawberry"
    assert {p["stockCode"] for p in products} == {"21232"}
    assert all("relevanceScore" in p for p in products)
    assert result.display_data.title == 'Semantic Search Results for "strawberry"'


def test_missing_required_argument_becomes_error_result(executor):
    result = executor.execute_tool(_call("vector_search", {}))
    assert result.result["error"].startswith("Error executing vector_search:")


def test_malformed_json_arguments_become_error_result(executor):
    result = executor.execute_tool(_call("get_products_by_country", "{not json"))
    assert result.display_data.title == "Tool Execution Error"


def test_executor_initialises_adapter_lazily(database, account):
    adapter = RetailIndexAdapter(account, database=database, embedding_dimensions=FAKE_DIMENSIONS)
    executor = ToolExecutor(adapter)
    assert executor.is_initialized is False

    result = executor.execute_tool(_call("get_top_selling_products"))

    assert executor.is_initialized is True
    assert result.result == {"topProducts": []}


def test_executor_reports_missing_account(database):
    executor = ToolExecutor(RetailIndexAdapter("ghost", database=database))
    result = executor.execute_tool(_call("get_top_selling_products"))
    assert "ghost" in result.result["error"]


def test_tool_result_to_dict_shape(executor):
    out = executor.execute_tool(_call("get_products_by_country", {"country": "Germany"}, "abc")).to_dict()
    assert set(out) == {"toolCallId", "result", "displayData"}
    assert out["toolCallId"] == "abc"
    assert set(out["displayData"]) == {"type", "data", "title"}
    assert len(out["result"]["products"]) == len([d for d in SAMPLE_DOCS if d["country"] == "Germany"])
