from __future__ import annotations

"""
FastAPI application for the parts assistant.

- /search runs the relevance search over the bundled catalogs
- /vehicle cleans the registration-card reader's raw answer
- /context builds the catalog context for the conversational assistant
- Collaborator failures come back as {"reason": ...} with 422 / 503
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field

from .catalog_build import load_catalog
from .config import (
    FAMILIES,
    UNIVERSAL_MODEL,
    HealthResponse,
    SearchRequest,
    SearchResponse,
)
from .context import build_catalog_context, is_small_talk
from .errors import PartsAssistantError
from .mapping import map_parts_to_response
from .search import search_parts
from .vehicle import VehicleInfo, extract_vehicle_info, family_for_vehicle


class VehicleRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ContextRequest(BaseModel):
    message: str
    model: Optional[str] = None
    vehicle: Optional[VehicleInfo] = None


class ContextResponse(BaseModel):
    small_talk: bool
    model: Optional[str] = None
    context: str = ""


def _check_model(model: Optional[str]) -> Optional[str]:
    if model is None or model == "":
        return None
    model = model.strip().lower().replace("-", "").replace(" ", "")
    if model != UNIVERSAL_MODEL and model not in FAMILIES:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown model '{model}'; expected one of {FAMILIES + [UNIVERSAL_MODEL]}",
        )
    if model == UNIVERSAL_MODEL:
        return None
    return model


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_catalog_size = 0


@app.on_event("startup")
def startup_event() -> None:
    global _catalog_size
    logger.info("Starting app warmup...")
    try:
        _catalog_size = len(load_catalog())
        logger.info("Loaded bundled catalogs with {} parts", _catalog_size)
    except FileNotFoundError as e:
        logger.warning("Catalog warmup failed: {}", e)
    logger.info("Warmup complete.")


@app.exception_handler(PartsAssistantError)
async def assistant_error_handler(request: Request, exc: PartsAssistantError) -> JSONResponse:
    logger.warning("{} on {}: {}", exc.reason, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"reason": exc.reason, "detail": exc.message},
    )


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy", catalog_size=_catalog_size)


@app.post("/search", response_model=SearchResponse)
def search(req: SearchRequest) -> SearchResponse:
    model = _check_model(req.model)
    parts = search_parts(req.query, model=model)
    return map_parts_to_response(parts)


@app.post("/vehicle", response_model=VehicleInfo, response_model_by_alias=False)
def vehicle(req: VehicleRequest) -> VehicleInfo:
    return extract_vehicle_info(req.text)


@app.post("/context", response_model=ContextResponse)
def context(req: ContextRequest) -> ContextResponse:
    model = _check_model(req.model) or family_for_vehicle(req.vehicle)
    if is_small_talk(req.message):
        return ContextResponse(small_talk=True, model=model)
    catalog = load_catalog(model)
    text = build_catalog_context(req.message, catalog, selected_model=model, vehicle=req.vehicle)
    return ContextResponse(small_talk=False, model=model, context=text)
