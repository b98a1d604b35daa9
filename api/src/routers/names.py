"""
Name registration router.

Registers names in the in-memory registry and maps the outcome to a
status code: 201 created, 409 duplicate, 400 any other failure.
"""

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.src.dependencies import get_name_service
from api.src.models.errors import ErrorKind, ErrorResponse
from api.src.models.name import NameRequest, NameResponse
from api.src.models.result import Failure
from api.src.services.name_service import NAME_ALREADY_EXISTS, NameService
from shared.metrics import get_metrics

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Names"])


@router.post(
    "/names",
    response_model=NameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Name",
    responses={
        201: {"description": "Name registered", "model": NameResponse},
        400: {"description": "Invalid name", "model": ErrorResponse},
        409: {
            "description": "Name already registered",
            "model": NameResponse,
            "content": {
                "application/json": {
                    "example": {"name": "Jane", "message": "Name already exists"}
                }
            }
        }
    }
)
async def create_name(
    name_request: NameRequest,
    name_service: NameService = Depends(get_name_service)
) -> JSONResponse:
    """Register a new name."""
    name = name_request.name
    logger.info("name_creation_requested", name=name)

    result = name_service.create_name(name)

    if isinstance(result, Failure):
        logger.warning("name_creation_failed", name=name, reason=result.error)

        if result.error == NAME_ALREADY_EXISTS:
            get_metrics().name_registrations.labels(outcome="conflict").inc()
            return _name_response(ErrorKind.CONFLICT.status_code, name, NAME_ALREADY_EXISTS)

        get_metrics().name_registrations.labels(outcome="rejected").inc()
        return _name_response(ErrorKind.VALIDATION.status_code, name, result.error)

    logger.info("name_created_successfully", name=name)
    get_metrics().name_registrations.labels(outcome="created").inc()

    return _name_response(status.HTTP_201_CREATED, name, "Name created successfully")


def _name_response(status_code: int, name: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=NameResponse(name=name, message=message).model_dump()
    )
