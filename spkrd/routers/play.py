import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect
from uuid6 import uuid7

from spkrd.load_settings import Settings
from spkrd.models.play_models import (
    DeviceBusyTimeout,
    DeviceHardError,
    InvalidMelody,
    PlayOutcome,
    PlayRequest,
    Success,
)
from spkrd.services import playback

play_router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def outcome_to_response(outcome: PlayOutcome) -> PlainTextResponse:
    """Map the outcome of a play request to the HTTP response

    Args:
        outcome (PlayOutcome): Terminal outcome from the retry loop

    Returns:
        PlainTextResponse: 200 with an empty body, or an error status with an explanation
    """
    if isinstance(outcome, Success):
        return PlainTextResponse("", status_code=status.HTTP_200_OK)
    if isinstance(outcome, InvalidMelody):
        return PlainTextResponse(outcome.reason, status_code=status.HTTP_400_BAD_REQUEST)
    if isinstance(outcome, DeviceBusyTimeout):
        return PlainTextResponse(
            "Device busy - request timed out",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    if isinstance(outcome, DeviceHardError):
        return PlainTextResponse(
            f"Device error: {outcome.detail}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    raise TypeError(f"Unknown play outcome: {outcome!r}")


class PlayAPI:
    @staticmethod
    @play_router.put("/play", response_class=PlainTextResponse)
    async def play(request: Request, settings: Settings = Depends(get_settings)):
        """Play the melody in the request body on the speaker device

        Args:
            request (Request): Raw melody bytes in the body, UTF-8 encoded
            settings (Settings): Device path and retry timeout

        Returns:
            PlainTextResponse: 200 played, 400 invalid melody, 503 device busy, 500 device error
        """
        try:
            body: bytes = await request.body()
        except ClientDisconnect:
            logging.info("Client disconnected before the body was read")
            return PlainTextResponse(
                "Failed to read request body", status_code=status.HTTP_400_BAD_REQUEST
            )

        try:
            melody = body.decode("utf-8")
        except UnicodeDecodeError as e:
            return PlainTextResponse(
                f"Invalid UTF-8 in melody data: {e}", status_code=status.HTTP_400_BAD_REQUEST
            )

        play_request = PlayRequest(
            request_id=uuid7(),
            melody=melody,
            client_host=request.client.host if request.client else "unknown",
            retry_timeout=settings.retry_timeout,
        )
        outcome = await playback.play_request(play_request, settings.device_path)
        return outcome_to_response(outcome)
