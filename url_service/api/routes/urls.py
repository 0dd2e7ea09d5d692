from fastapi import APIRouter, Depends, Path, Query, status

from url_service.api import schemas
from url_service.api.dependencies import (
    get_listing_service,
    get_resolution_service,
    get_shortening_service,
)
from url_service.services.listing import ListingService
from url_service.services.resolver import ResolutionService
from url_service.services.shortener import ShorteningService

router = APIRouter(tags=["urls"])


@router.post(
    "/urls",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid URL"},
        500: {"model": schemas.ErrorResponse, "description": "URL could not be stored"},
        503: {"model": schemas.ErrorResponse, "description": "URL store unavailable"},
    },
)
async def shorten_url(
    payload: schemas.ShortenRequest,
    shortening_service: ShorteningService = Depends(get_shortening_service),
):
    result = await shortening_service.shorten(payload.url)
    return schemas.ShortenResponse.from_result(result)


@router.get(
    "/urls",
    response_model=schemas.URLListResponse,
)
async def list_urls(
    page: int = Query(1, description="1-based page number"),
    page_size: int = Query(0, description="Records per page (0 uses the default)"),
    listing_service: ListingService = Depends(get_listing_service),
):
    url_page = await listing_service.list_urls(page, page_size)
    return schemas.URLListResponse.from_page(url_page)


@router.get(
    "/urls/{short_code}",
    response_model=schemas.ExpandResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "Short code not found"},
        503: {"model": schemas.ErrorResponse, "description": "URL store unavailable"},
    },
)
async def expand_url(
    short_code: str = Path(..., description="The short code to resolve"),
    resolution_service: ResolutionService = Depends(get_resolution_service),
):
    result = await resolution_service.expand(short_code)
    return schemas.ExpandResponse.from_result(result)
