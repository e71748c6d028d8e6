"""
Thumbor URL API Endpoints
Generates thumbor URLs for scripted callers
"""

from typing import Dict, List

from fastapi import APIRouter

from thumbor_url.core.logging import get_logger
from thumbor_url.models.builder import DynamicBuilder
from thumbor_url.models.url import Url
from thumbor_url.schemas.thumbor import ThumborUrlRequest, ThumborUrlResponse
from thumbor_url.services.thumbor import thumbor_service

# Create router
router = APIRouter(tags=["thumbor"])
logger = get_logger("thumbor_api")


@router.post(
    "/thumbor/url",
    response_model=ThumborUrlResponse,
    summary="Generate a thumbor URL",
    description="""
    Build a thumbor URL for an original image from a list of named operations.

    ## Operations
    - trim, crop, fit_in, resize, halign, valign, smart_crop, add_filter, metadata_only
    - camelCase spellings (fitIn, smartCrop, addFilter, metadataOnly) are accepted

    Originals whose file type cannot be proxied are returned unchanged.
    Unknown operation names are rejected with a 400 response.
    """
)
async def generate_thumbor_url(request: ThumborUrlRequest) -> ThumborUrlResponse:
    """Generate a thumbor URL from named operations."""
    builder = DynamicBuilder(thumbor_service.url(request.url))
    builder.apply((operation.name, operation.args) for operation in request.operations)

    result = builder.build()
    proxied = isinstance(result, Url)

    logger.info(
        f"Thumbor URL generated for {request.url} "
        f"({len(request.operations)} operations, proxied: {proxied})"
    )

    return ThumborUrlResponse(
        original_url=request.url,
        url=str(result),
        proxied=proxied,
        signed=proxied and result.is_signed
    )


@router.get(
    "/thumbor/operations",
    summary="List supported operations",
    description="List the operation names accepted by the URL endpoint"
)
async def list_operations() -> Dict[str, List[str]]:
    """List the supported operation names."""
    return {"operations": DynamicBuilder.operation_names()}
