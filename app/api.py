"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from app.schemas import MessageAccepted, RejectedMessage
from models.errors import MessageDecodeError
from protocol import codec
from services.responder import MoldDataResponder, build_default_responder

router = APIRouter()

_WIRE_MEDIA_TYPE = "application/json"


def get_responder() -> MoldDataResponder:
    return build_default_responder()


@router.post(
    "/messages",
    summary="Submit one wire message and receive the controller-side reply, if any.",
    responses={
        status.HTTP_202_ACCEPTED: {"model": MessageAccepted},
        status.HTTP_404_NOT_FOUND: {"description": "No mold data for the requested controller or field."},
        422: {"description": "Payload failed to decode; detail follows the RejectedMessage schema."},
    },
)
async def post_message(
    payload: Dict[str, Any] = Body(..., description="Wire message including its $type member."),
    responder: MoldDataResponder = Depends(get_responder),
) -> Response:
    try:
        message = codec.decode_payload(payload)
    except MessageDecodeError as exc:
        raise HTTPException(
            status_code=422,
            detail=RejectedMessage.from_error(exc).model_dump(mode="json"),
        ) from exc

    try:
        reply = responder.handle(message)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0],
        ) from exc

    if reply is None:
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content=MessageAccepted().model_dump(),
        )
    # Encoded by hand so member order and omission rules survive.
    return Response(content=codec.encode(reply), media_type=_WIRE_MEDIA_TYPE)


@router.get(
    "/controllers/{controller_id}/mold-data",
    summary="Fetch the latest mold data snapshot recorded for a controller.",
)
async def get_mold_data(
    controller_id: int,
    responder: MoldDataResponder = Depends(get_responder),
) -> Response:
    try:
        snapshot = responder.latest_snapshot(controller_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0],
        ) from exc
    return Response(content=codec.encode(snapshot), media_type=_WIRE_MEDIA_TYPE)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
