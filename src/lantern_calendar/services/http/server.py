from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from hypercorn.asyncio import serve
from hypercorn.config import Config
from pydantic import BaseModel, Field

from ...api import REGISTRY, api_state, call_api, get_api_functions

logger = logging.getLogger(__name__)

app = FastAPI(title="Lantern Calendar Local API", version="0.1.0", default_response_class=ORJSONResponse)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _dispatch(function_name: str, arguments: Dict[str, Any]) -> Any:
    if function_name not in REGISTRY:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=f"API function '{function_name}' is not registered.")
    try:
        return call_api(function_name, **arguments)
    except ValueError as exc:
        logger.warning("API function %s rejected arguments: %s", function_name, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("API function %s failed", function_name)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok", "source_version": api_state.context.calendar_source().version}


@app.get("/api/functions")
async def list_api_functions(category: Optional[str] = None) -> Dict[str, Any]:
    return {"functions": [func.describe() for func in get_api_functions(category)]}


@app.post("/api/functions/{function_name}")
def invoke_api_function(function_name: str, request: ApiCallRequest) -> Dict[str, Any]:
    result = _dispatch(function_name, request.arguments)
    logger.debug("API function %s executed successfully", function_name)
    return {"name": function_name, "result": result}


@app.get("/api/months/{month}")
def month_grid(month: str, week_start: Optional[str] = None) -> Dict[str, Any]:
    return _dispatch("calendar_month_grid", {"month": month, "week_start": week_start})


@app.get("/api/days/{day}")
def day_agenda(day: str) -> Dict[str, Any]:
    return _dispatch("calendar_day_agenda", {"day": day})


@app.get("/api/reminders")
def reminder_buckets() -> Dict[str, Any]:
    return _dispatch("reminders_classify", {})


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Lantern Calendar API on %s:%d", host, port)
    asyncio.run(serve(app, config))
