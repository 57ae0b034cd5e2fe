"""HTTP boundary for the analysis pipeline.

POST /api/analyze with {"url": ..., "apiKey": ...} returns {"analysis": {...}}
on success or {"error": "..."} with a 4xx/5xx status on failure. A request that
runs past PIPELINE_TIMEOUT is answered with a timeout error; the worker thread
is abandoned, not killed.

Usage:
    uvicorn marketing_agent.main_api:app
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import get_settings
from .errors import InputInvalid, PipelineError, UnknownError
from .llm.schema import MarketingAnalysis
from .log import setup_logging, get_logger
from .pipeline.run import TIMEOUT_MESSAGE, pipeline

setup_logging()
logger = get_logger("api")

app = FastAPI(title="Marketing Agent")

_executor = ThreadPoolExecutor(thread_name_prefix="analyze")

def _error_response(error: PipelineError) -> JSONResponse:
    return JSONResponse(error.to_response(), status_code=error.status_code)

async def _run_with_deadline(url: str, api_key: str) -> Union[MarketingAnalysis, PipelineError]:
    limit = get_settings().PIPELINE_TIMEOUT
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(_executor, pipeline.run, url, api_key)
    try:
        return await asyncio.wait_for(future, timeout=limit)
    except asyncio.TimeoutError:
        logger.warning(f"Analysis of {url} exceeded {limit}s, abandoning it")
        return UnknownError(TIMEOUT_MESSAGE, detail=f"request exceeded {limit}s")

@app.get("/healthz")
async def healthz():
    return {"status": "ok"}

@app.post("/api/analyze")
async def analyze(request: Request):
    # 1. Parse Body
    try:
        payload = await request.json()
    except ValueError:
        return _error_response(InputInvalid(detail="request body is not valid JSON"))
    if not isinstance(payload, dict):
        return _error_response(InputInvalid(detail="request body is not a JSON object"))

    url = payload.get("url")
    api_key = payload.get("apiKey")
    if not isinstance(url, str) or not isinstance(api_key, str):
        logger.info("Rejected analyze request without url/apiKey strings")
        return _error_response(InputInvalid(detail="url and apiKey must be strings"))

    # 2. Run the blocking pipeline in a worker thread, bounded by the deadline
    result = await _run_with_deadline(url, api_key)
    if isinstance(result, PipelineError):
        return _error_response(result)

    return {"analysis": result.to_payload()}
