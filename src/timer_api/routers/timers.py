from __future__ import annotations

import logging
from typing import Any, Union

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from ..errors import NOT_FOUND, StoreFailure, ValidationFailed, format_error, format_server_error
from ..formatting import TimerStyle
from ..repositories import Repository
from ..schemas import TimerCreated, TimerEnvelope, as_timer_out, validate_timer_payload

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/timers",
    tags=["timers"],
)


def get_repository_dependency(request: Request) -> Repository:
    """
    Return the repository opened by the application lifespan.
    """
    return request.app.state.repository


def _server_error() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=format_server_error())


# PUBLIC_INTERFACE
@router.get(
    "/{timer_id}",
    response_model=TimerEnvelope,
    summary="Get Timer",
    description=(
        "Get a single Timer by ID. The returned timer carries 'remaining' (milliseconds until "
        "its date, negative once passed) and 'countdown' rendered in the requested style."
    ),
    responses={
        200: {"description": "Timer found"},
        400: {"description": "Unknown countdown style"},
        404: {"description": "Timer not found"},
        500: {"description": "Storage failure"},
    },
)
def get_timer(
    timer_id: str,
    style: TimerStyle = Query(TimerStyle.DIGIT, description="Countdown style: 'digit' or 'word'"),
    repo: Repository = Depends(get_repository_dependency),
) -> Union[TimerEnvelope, JSONResponse]:
    """
    Retrieve a single Timer by its ID.
    """
    try:
        item = repo.get(timer_id)
    except StoreFailure:
        logger.exception("Failed to read timer %s", timer_id)
        return _server_error()

    if item is None:
        logger.info("Timer %s not found", timer_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=format_error(NOT_FOUND, "Timer not found"),
        )
    return TimerEnvelope(timer=as_timer_out(item, style))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TimerCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create Timer",
    description="Create a new Timer and return its ID.",
    responses={
        201: {"description": "Timer created successfully"},
        400: {"description": "Validation error, one entry per invalid field"},
        500: {"description": "Storage failure"},
    },
)
def create_timer(
    payload: Any = Body(None, examples=[{"title": "New year", "date": "2027-01-01T00:00:00Z"}]),
    repo: Repository = Depends(get_repository_dependency),
) -> Union[TimerCreated, JSONResponse]:
    """
    Create a new Timer.
    """
    try:
        data = validate_timer_payload(payload)
    except ValidationFailed as exc:
        logger.info("Rejected timer creation: %s", exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.errors)

    try:
        created = repo.create(data)
    except StoreFailure:
        logger.exception("Failed to create timer")
        return _server_error()
    return TimerCreated(id=created["id"])
