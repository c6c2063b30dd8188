import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import get_settings
from .models import ErrorResponse, HealthResponse, Organization
from .service import fetch_organizations
from .store import AirtableStore, RecordStore, RecordStoreError

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        level = get_settings().log_level
    except ValidationError as exc:
        LOGGER.warning("Settings incomplete, organization requests will fail: %s", exc)
    else:
        logging.getLogger("org_directory").setLevel(level)
    yield


app = FastAPI(
    title="org-directory",
    description="Normalized organization records for the directory front end",
    version="0.1.0",
    lifespan=lifespan,
)


async def get_store() -> AsyncIterator[RecordStore]:
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise RecordStoreError(f"Record store is not configured: {exc}") from exc

    async with AirtableStore(
        settings.base_id,
        settings.table_name,
        settings.token.get_secret_value(),
        api_url=settings.api_url,
        timeout=settings.timeout,
    ) as store:
        yield store


def _fetch_failed(exc: Exception) -> JSONResponse:
    body = ErrorResponse(error="Failed to fetch organizations", details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


@app.exception_handler(RecordStoreError)
async def record_store_error_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
    LOGGER.error("Error fetching data from Airtable: %s", exc)
    return _fetch_failed(exc)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get(
    "/api/organizations",
    response_model=List[Organization],
    responses={500: {"model": ErrorResponse}},
)
async def list_organizations(store: RecordStore = Depends(get_store)):
    try:
        return await fetch_organizations(store)
    except RecordStoreError:
        raise
    except Exception as exc:
        LOGGER.exception("Error fetching organizations")
        return _fetch_failed(exc)
