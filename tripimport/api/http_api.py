"""
HTTP API adapter for the paste-import pipeline.

Architectural role:
- Expose one endpoint per deployment variant.
- Resolve the provider credential and transport as FastAPI dependencies.
- Delegate all request handling to `tripimport.core.engine.handle_paste_import`.
- Render the pipeline result as JSON (success) or plain text (failure).

Endpoint responsibilities:
- `POST /api/parsePaste`: literal extraction of pasted travel text (variant A).
- `POST /api/planPaste`: generative day planning for the trip destination (variant B).
- `GET /health`: liveness probe.

API request lifecycle (paste endpoints):
1. Read the raw request body (method is not checked here).
2. Run the blocking pipeline in a worker thread.
3. Render the `AdapterResponse` with its status code and headers.

Method handling:
- Paste routes are registered for every standard method so that the pipeline
  itself answers non-POST calls with 405 and `Allow: POST`.
- Any other method the router rejects on a paste path is re-answered by the
  pipeline through `paste_method_not_allowed`.

Error handling strategy:
- All failures are produced by the pipeline as plain-text responses.
- Nothing is raised out of the route handlers.

Side effects:
- One outbound provider call per accepted request.
- Loads environment variables at import time via `load_dotenv()`.
"""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import logging
import os
from typing import Any, Callable, Optional

import requests
from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from tripimport.core.engine import handle_paste_import
from tripimport.core.types import AdapterResponse, PasteImportConfig
from tripimport.llm.provider_config import EXTRACT_CONFIG, PLAN_CONFIG, load_key


logger = logging.getLogger(__name__)

app = FastAPI(title="Trip Paste Import API", version="1.0.0")

# Every standard method is routed to the pipeline so that non-POST calls get
# its 405 with `Allow: POST` instead of the router's own 405.
PASTE_ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]
PASTE_PATHS = ("/api/parsePaste", "/api/planPaste")


# ============================================================
# Dependencies
# ============================================================

def get_api_key() -> Optional[str]:
    """Resolve the Gemini credential at call time."""
    return load_key()


def get_provider_post() -> Callable[..., Any]:
    """Return the HTTP POST callable used for provider calls."""
    return requests.post


# ============================================================
# Rendering
# ============================================================

def render(result: AdapterResponse) -> Response:
    """Convert a pipeline result into a Starlette response."""
    if result.is_json:
        return JSONResponse(status_code=result.status_code, content=result.content, headers=result.headers)
    return PlainTextResponse(status_code=result.status_code, content=result.content, headers=result.headers)


@app.exception_handler(StarletteHTTPException)
async def paste_method_not_allowed(request: Request, exc: StarletteHTTPException):
    """Keep `Allow: POST` on paste paths for methods outside the route list."""
    if exc.status_code == 405 and request.url.path in PASTE_PATHS:
        result = handle_paste_import(request.method, None, config=EXTRACT_CONFIG, api_key=None)
        return render(result)
    return await http_exception_handler(request, exc)


async def run_variant(
    request: Request,
    config: PasteImportConfig,
    api_key: Optional[str],
    post: Callable[..., Any],
) -> Response:
    """Run one variant's pipeline for an inbound request."""
    body = await request.body()
    result = await asyncio.to_thread(
        handle_paste_import,
        request.method,
        body,
        config=config,
        api_key=api_key,
        post=post,
    )
    return render(result)


# ============================================================
# Endpoints
# ============================================================

@app.get("/health")
def health():
    """Return 200 while the process is serving."""
    return {"status": "ok"}


@app.api_route(PASTE_PATHS[0], methods=PASTE_ROUTE_METHODS)
async def parse_paste(
    request: Request,
    api_key: Optional[str] = Depends(get_api_key),
    post: Callable[..., Any] = Depends(get_provider_post),
):
    """Extract trip items literally from pasted text."""
    return await run_variant(request, EXTRACT_CONFIG, api_key, post)


@app.api_route(PASTE_PATHS[1], methods=PASTE_ROUTE_METHODS)
async def plan_paste(
    request: Request,
    api_key: Optional[str] = Depends(get_api_key),
    post: Callable[..., Any] = Depends(get_provider_post),
):
    """Generate a day of trip items for the trip destination."""
    return await run_variant(request, PLAN_CONFIG, api_key, post)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if os.getenv("DEBUG") == "true" else logging.INFO)
    uvicorn.run(
        "tripimport.api.http_api:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
