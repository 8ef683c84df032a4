# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-25
# Updated: 2026-10-18
# Description: gradio_app.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr
import pandas as pd
import requests

import settings

# Configuration (see settings.py)
API_BASE_URL = settings.API_BASE_URL.rstrip("/")
LOG_FILE = settings.LOG_FILE
LOG_TAIL_LINES = settings.UI_LOG_TAIL_LINES
TIMEOUT_SECONDS = settings.UI_TIMEOUT_SECONDS


# Small URL helpers
def _url(path: str) -> str:
    return f"{API_BASE_URL}{path}"


def _get(path: str, params: Optional[dict] = None) -> Dict[str, Any]:
    try:
        r = requests.get(_url(path), params=params, timeout=TIMEOUT_SECONDS)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": f"API request failed: {e}"}


def _post(path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        r = requests.post(_url(path), json=payload, timeout=TIMEOUT_SECONDS)
        if not r.ok:
            return {"error": f"HTTP {r.status_code}: {r.text}"}
        return r.json()
    except requests.exceptions.RequestException as e:
        return {"error": f"RequestException: {e}"}


# Log tailing for UI
def tail_log_file(path: str, n_lines: int = 200) -> str:
    """Tail last n_lines from a local log file path."""
    if not path or not os.path.exists(path):
        return f"[log] file not found: {path}"
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        return f"[log] failed to read log file: {e}"
    lines = data.decode("utf-8", errors="replace").splitlines()[-int(n_lines):]
    return "\n".join(lines)


def last_table(tool_results: List[Dict[str, Any]]) -> pd.DataFrame:
    """Most recent table-typed display payload as a DataFrame."""
    for item in reversed(tool_results or []):
        if item.get("type") == "table" and isinstance(item.get("data"), list):
            return pd.DataFrame(item["data"])
    return pd.DataFrame()


def last_notice(tool_results: List[Dict[str, Any]]) -> str:
    """Most recent text-typed display payload (e.g. a tool error) as Markdown."""
    for item in reversed(tool_results or []):
        if item.get("type") == "text":
            title = item.get("title") or "Note"
            data = item.get("data")
            body = data if isinstance(data, str) else json.dumps(data, indent=2, default=str)
            return f"**{title}**\n\n{body}"
    return ""


# Chat UI functions
def ui_chat(question: str, history) -> Tuple[list, pd.DataFrame, str, str, str]:
    question = (question or "").strip()
    history = list(history or [])
    if not question:
        return history, pd.DataFrame(), "", "", ""

    messages: List[Dict[str, str]] = [
        {"role": m["role"], "content": m["content"]}
        for m in history
        if isinstance(m, dict) and m.get("role") in ("user", "assistant") and isinstance(m.get("content"), str)
    ]
    messages.append({"role": "user", "content": question})

    out = _post("/api/chat", payload={"messages": messages})
    if "error" in out:
        answer = f"Error: {out['error']}"
    else:
        answer = out.get("message") or ""

    history = history + [
        {"role": "user", "content": question},
        {"role": "assistant", "content": answer},
    ]

    tool_results = out.get("toolResults") or []
    return (
        history,
        last_table(tool_results),
        last_notice(tool_results),
        json.dumps(tool_results, indent=2, default=str),
        json.dumps(out.get("usage"), indent=2),
    )


# Stats UI functions
def ui_get_stats() -> Tuple[str, pd.DataFrame]:
    stats = _get("/stats")
    summary = pd.DataFrame(
        [
            {"metric": "totalProducts", "value": stats.get("totalProducts")},
            {"metric": "scannedProducts", "value": stats.get("scannedProducts")},
            {"metric": "uniqueCountries", "value": len(stats.get("uniqueCountries") or [])},
            {"metric": "uniqueCustomers", "value": len(stats.get("uniqueCustomers") or [])},
            {"metric": "uniqueStockCodes", "value": len(stats.get("uniqueStockCodes") or [])},
            {"metric": "totalRevenue", "value": stats.get("totalRevenue")},
            {"metric": "totalQuantity", "value": stats.get("totalQuantity")},
        ]
    )
    return json.dumps(stats, indent=2), summary


def ui_deep_health(run_llm_check: bool) -> str:
    return json.dumps(_get("/health/deep", params={"run_llm_check": run_llm_check}), indent=2)


# Build Gradio UI
def build_gradio_app(api_base_url: str = API_BASE_URL) -> gr.Blocks:
    global API_BASE_URL
    API_BASE_URL = api_base_url.rstrip("/")

    with gr.Blocks(title="Retail Chat", analytics_enabled=False) as demo:
        gr.Markdown(f"""# Retail Chat Assistant **API:** `{API_BASE_URL}`  **Log file:** `{LOG_FILE}`""")

        with gr.Tab("Chat"):
            chatbot = gr.Chatbot(label="Chat", type="messages", height=420)
            question = gr.Textbox(
                label="Question",
                placeholder="What were the top selling products in the United Kingdom?",
            )
            send_btn = gr.Button("Send")

            with gr.Row():
                results_df = gr.Dataframe(label="Last table result", interactive=False, scale=3)
                notice_md = gr.Markdown()
            with gr.Row():
                tool_json = gr.Code(label="Tool results (displayData)", language="json")
                usage_json = gr.Code(label="Usage", language="json")

            send_btn.click(
                fn=ui_chat,
                inputs=[question, chatbot],
                outputs=[chatbot, results_df, notice_md, tool_json, usage_json],
            ).then(lambda: "", outputs=[question])  # clear input after send

        with gr.Tab("Stats"):
            stats_btn = gr.Button("Refresh stats (/stats)")
            stats_df = gr.Dataframe(label="Summary", interactive=False)
            stats_json = gr.Code(label="Stats JSON", language="json")
            stats_btn.click(fn=ui_get_stats, outputs=[stats_json, stats_df])

            gr.Markdown("### Health")
            with gr.Row():
                llm_check = gr.Checkbox(value=False, label="Include LLM ping")
                health_btn = gr.Button("Run /health/deep")
            health_json = gr.Code(label="Health JSON", language="json")
            health_btn.click(fn=ui_deep_health, inputs=[llm_check], outputs=[health_json])

        with gr.Tab("Logs"):
            with gr.Row():
                log_path = gr.Textbox(label="Log file path", value=LOG_FILE)
                tail_lines = gr.Slider(50, 2000, value=LOG_TAIL_LINES, step=50, label="Tail lines")
                refresh_logs_btn = gr.Button("Refresh logs")
            log_view = gr.Textbox(label="Logs", value="", lines=25, interactive=False)

            refresh_logs_btn.click(fn=tail_log_file, inputs=[log_path, tail_lines], outputs=[log_view])

    return demo
