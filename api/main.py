# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: main.py
# -----------------------------------------------------------------------------
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import settings
from api.AppContainer import get_container
from api.routers import chat, health, stats

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Load the search index before the first request; tools retry lazily on failure
    try:
        await asyncio.to_thread(get_container().tool_executor.initialize)
    except Exception as e:
        logger.warning("Search index not initialised at startup: %s", e)
    yield


app = FastAPI(title="Retail Chat API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(stats.router)
app.include_router(chat.router)

# Mount Gradio (served by the SAME uvicorn process/port)
if settings.MOUNT_UI:
    import gradio as gr

    from ui.gradio_app import build_gradio_app

    gradio_blocks = build_gradio_app(api_base_url=settings.API_BASE_URL)
    app = gr.mount_gradio_app(app, gradio_blocks, path="/ui")
