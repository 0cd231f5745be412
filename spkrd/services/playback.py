import asyncio
import logging
import time
from datetime import datetime, timezone

from spkrd.domain.melody_rules import printable_melody, validate_melody
from spkrd.models.play_models import (
    DeviceBusyTimeout,
    DeviceHardError,
    InvalidMelody,
    PlayOutcome,
    PlayRequest,
    Success,
)
from spkrd.speaker import SpeakerBusyError, SpeakerDeviceError, attempt_write

RETRY_INTERVAL = 1.0  # seconds between two attempts on a busy device


async def play_with_retry(
    melody: str,
    device_path: str,
    timeout: float,
    *,
    sleep=asyncio.sleep,
    clock=time.monotonic,
) -> PlayOutcome:
    """Write the melody to the device, retrying while it is busy.

    A busy device is retried every RETRY_INTERVAL seconds until the write succeeds
    or the timeout has elapsed since the first attempt. Hard device errors are
    returned at once.

    Args:
        melody (str): Decoded melody text
        device_path (str): Path of the speaker device
        timeout (float): Retry budget in seconds
        sleep: Coroutine function used to wait between attempts
        clock: Monotonic clock in seconds

    Returns:
        PlayOutcome: Success, InvalidMelody, DeviceBusyTimeout or DeviceHardError
    """
    reason = validate_melody(melody)
    if reason is not None:
        return InvalidMelody(reason=reason)

    loop = asyncio.get_running_loop()
    start_time = clock()
    retries = 0

    while True:
        try:
            await loop.run_in_executor(None, attempt_write, melody, device_path)
            return Success(retries=retries)
        except SpeakerDeviceError as exc:
            return DeviceHardError(detail=exc.detail)
        except SpeakerBusyError:
            elapsed = clock() - start_time
            if elapsed >= timeout:
                return DeviceBusyTimeout(retries=retries)
            retries += 1
            logging.debug(f"Device busy, retry {retries} after {elapsed:.1f}s")
            await sleep(RETRY_INTERVAL)


def log_request(request: PlayRequest) -> None:
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    logging.info(
        f"[{timestamp}] {request.client_host} - Melody: {printable_melody(request.melody)}"
    )


async def play_request(request: PlayRequest, device_path: str) -> PlayOutcome:
    """Log the request, play it and log how it ended

    Args:
        request (PlayRequest): Melody, client address and retry budget
        device_path (str): Path of the speaker device

    Returns:
        PlayOutcome: Outcome of play_with_retry
    """
    # Rejected melodies are not copied into the audit log
    reason = validate_melody(request.melody)
    if reason is not None:
        logging.info(
            f"{request.request_id}: rejected {len(request.melody)} characters "
            f"from {request.client_host}: {reason}"
        )
        return InvalidMelody(reason=reason)

    log_request(request)
    outcome = await play_with_retry(request.melody, device_path, request.retry_timeout)

    if isinstance(outcome, Success):
        logging.info(f"{request.request_id}: played after {outcome.retries} retries")
    elif isinstance(outcome, DeviceBusyTimeout):
        logging.warning(
            f"{request.request_id}: device still busy after {request.retry_timeout}s "
            f"({outcome.retries} retries)"
        )
    else:
        logging.error(f"{request.request_id}: device error: {outcome.detail}")
    return outcome
