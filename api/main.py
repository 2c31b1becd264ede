"""
FastAPI application for the Company Analytics API.

Exposes the companies collection via read-only HTTP endpoints with
auto-generated OpenAPI documentation at /docs.
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional
import logging
import re

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from utils.log import setup_logging

from .config import settings
from .data_access import CompanyDataProvider
from .errors import BadRequestError, InternalError, QueryError
from .models import (
    CompanyListResponse,
    CountResponse,
    ErrorResponse,
    HealthResponse,
    StoredCompany,
)

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed parameter"},
    500: {"model": ErrorResponse, "description": "Store or server failure"},
}

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def get_provider(request: Request) -> CompanyDataProvider:
    """Store client shared by every handler of this app."""
    return request.app.state.provider


def _parse_int(raw: Optional[str], message: str) -> Optional[int]:
    """
    Parse an optional 64-bit integer query value. Blank counts as absent.

    Only an optional sign followed by ASCII digits is accepted, so
    underscores, padding and values outside the int64 range are rejected.
    """
    if raw is None or not raw.strip():
        return None
    if not INTEGER_PATTERN.fullmatch(raw):
        raise BadRequestError(message)
    # int64 has at most 19 significant digits
    if len(raw.lstrip("+-").lstrip("0")) > 19:
        raise BadRequestError(message)
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise BadRequestError(message)
    return value


def _search_term(raw: str, name: str) -> str:
    term = raw.strip()
    if not term:
        raise BadRequestError(f"Invalid {name} parameter")
    return term


def _to_companies(docs: List[Dict]) -> List[StoredCompany]:
    """Validate stored documents, skipping any that cannot be served."""
    companies = (StoredCompany.from_document(doc) for doc in docs)
    return [company for company in companies if company is not None]


# ----------------------------------------------------------------
# Health & Info
# ----------------------------------------------------------------

@router.get("/", response_model=HealthResponse, responses=ERROR_RESPONSES, tags=["Health"])
def root(data: CompanyDataProvider = Depends(get_provider)):
    """
    API health check and information.

    Returns service status and the live company count.
    """
    try:
        total = data.count()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise InternalError()
    return {
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "status": "healthy",
        "database": data.database_name,
        "collection": data.collection_name,
        "total_companies": total,
    }


# ----------------------------------------------------------------
# Range & Ranking Endpoints
# ----------------------------------------------------------------

@router.get(
    "/api/companies/headcount-range",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    tags=["Companies"],
)
def get_by_headcount_range(
    min_param: Optional[str] = Query(None, alias="min", description="Inclusive minimum headcount (default 0)"),
    max_param: Optional[str] = Query(None, alias="max", description="Inclusive maximum headcount (unbounded if absent)"),
    data: CompanyDataProvider = Depends(get_provider),
):
    """
    Get companies whose headcount lies in [min, max].

    Both bounds must be integers. No ordering, no pagination.
    """
    message = "Invalid min or max parameter"
    min_headcount = _parse_int(min_param, message)
    max_headcount = _parse_int(max_param, message)
    if min_headcount is None:
        min_headcount = 0

    try:
        docs = data.get_by_headcount_range(min_headcount, max_headcount)
        return {"items": _to_companies(docs)}
    except Exception as e:
        logger.error(f"GET /api/companies/headcount-range error: {e}")
        raise InternalError()


@router.get(
    "/api/companies/top-paid",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    tags=["Companies"],
)
def get_top_paid(
    limit: Optional[str] = Query(None, description="Number of companies (default 5, capped at 50)"),
    data: CompanyDataProvider = Depends(get_provider),
):
    """
    Get companies ranked by base salary, highest first.

    - **limit**: clamped into [1, 50]; larger requests are not rejected
    - companies without a base salary rank last, ties break on id
    """
    requested = _parse_int(limit, "Invalid limit parameter")
    if requested is None:
        requested = settings.TOP_PAID_DEFAULT_LIMIT
    capped = max(1, min(requested, settings.TOP_PAID_MAX_LIMIT))

    try:
        docs = data.get_top_paid(capped)
        return {"items": _to_companies(docs)}
    except Exception as e:
        logger.error(f"GET /api/companies/top-paid error: {e}")
        raise InternalError()


@router.get(
    "/api/companies/count",
    response_model=CountResponse,
    responses=ERROR_RESPONSES,
    tags=["Companies"],
)
def get_count(data: CompanyDataProvider = Depends(get_provider)):
    """Total number of companies in the store at call time."""
    try:
        return {"total": data.count()}
    except Exception as e:
        logger.error(f"GET /api/companies/count error: {e}")
        raise InternalError()


# ----------------------------------------------------------------
# Match Endpoints
# ----------------------------------------------------------------

@router.get(
    "/api/companies/by-location/{location:path}",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    tags=["Search"],
)
def get_by_location(location: str, data: CompanyDataProvider = Depends(get_provider)):
    """Companies located in `location` (case-insensitive, exact)."""
    term = _search_term(location, "location")
    try:
        return {"items": _to_companies(data.get_by_location(term))}
    except Exception as e:
        logger.error(f"GET /api/companies/by-location/{term} error: {e}")
        raise InternalError()


@router.get(
    "/api/companies/by-skill/{skill:path}",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    tags=["Search"],
)
def get_by_skill(skill: str, data: CompanyDataProvider = Depends(get_provider)):
    """Companies hiring for `skill` (case-insensitive, exact skill name)."""
    term = _search_term(skill, "skill")
    try:
        return {"items": _to_companies(data.get_by_skill(term))}
    except Exception as e:
        logger.error(f"GET /api/companies/by-skill/{term} error: {e}")
        raise InternalError()


@router.get(
    "/api/companies/benefit/{benefit:path}",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    tags=["Search"],
)
def get_by_benefit(benefit: str, data: CompanyDataProvider = Depends(get_provider)):
    """Companies offering a benefit containing `benefit` (case-insensitive)."""
    term = _search_term(benefit, "benefit")
    try:
        return {"items": _to_companies(data.get_by_benefit(term))}
    except Exception as e:
        logger.error(f"GET /api/companies/benefit/{term} error: {e}")
        raise InternalError()


# ----------------------------------------------------------------
# Application factory
# ----------------------------------------------------------------

async def handle_query_error(request: Request, exc: QueryError) -> JSONResponse:
    """Render every query-layer error as {"error": ...}. 500s never leak detail."""
    if exc.status_code >= 500:
        message = "Internal Server Error"
    else:
        message = exc.message
        logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=exc.status_code, content={"error": message})


def create_app(provider: Optional[CompanyDataProvider] = None) -> FastAPI:
    """
    Build the API around an explicitly constructed store client.

    The provider is opened when the app starts and closed when it stops.
    """
    provider = provider or CompanyDataProvider()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        provider.open()
        logger.info(f"Connected to store: {provider.database_name}.{provider.collection_name}")
        try:
            yield
        finally:
            provider.close()
            logger.info("Store connection closed")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.provider = provider

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QueryError, handle_query_error)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
