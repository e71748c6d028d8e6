from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field


FilterArg = Union[bool, int, float, str, None]


class Operation(BaseModel):
    """A single named transformation operation."""
    name: str = Field(
        ...,
        description="Operation name, e.g. fit_in, resize, crop, add_filter"
    )
    args: List[FilterArg] = Field(
        default_factory=list,
        description="Positional arguments for the operation"
    )


class ThumborUrlRequest(BaseModel):
    """Request model for thumbor URL generation."""
    url: str = Field(
        ...,
        description="Absolute URL or relative path of the original image"
    )
    operations: List[Operation] = Field(
        default_factory=list,
        description="Operations applied in order"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "http://images.example.com/llamas.jpg",
                "operations": [
                    {"name": "fit_in", "args": [320, 240]},
                    {"name": "add_filter", "args": ["brightness", 42]}
                ]
            }
        }
    }


class ThumborUrlResponse(BaseModel):
    """Response model for thumbor URL generation."""
    original_url: str = Field(
        ...,
        description="Original image locator"
    )
    url: str = Field(
        ...,
        description="Generated thumbor URL, or the original when it is passed through"
    )
    proxied: bool = Field(
        ...,
        description="Whether the URL points at the thumbor server"
    )
    signed: bool = Field(
        ...,
        description="Whether the URL carries an HMAC signature"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "original_url": "http://images.example.com/llamas.jpg",
                "url": "http://thumbor.example.com/unsafe/fit-in/320x240/filters:brightness(42)/http://images.example.com/llamas.jpg",
                "proxied": True,
                "signed": False
            }
        }
    }


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""
    status: str = Field(
        ...,
        description="Service status"
    )
    version: str = Field(
        ...,
        description="API version"
    )
    services: Dict[str, Any] = Field(
        ...,
        description="Status of individual services"
    )
