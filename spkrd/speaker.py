import errno
import logging
import os

# Another writer holds the device
BUSY_ERRNOS = frozenset({errno.EBUSY, errno.EAGAIN, errno.EWOULDBLOCK, errno.EADDRINUSE})


class SpeakerError(Exception):
    """Base class of the errors raised by one write attempt"""


class SpeakerBusyError(SpeakerError):
    def __init__(self, detail: str = "Speaker device is busy"):
        super().__init__(detail)


class SpeakerDeviceError(SpeakerError):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


def classify_os_error(exc: OSError) -> SpeakerError:
    """Bucket an OSError from the device into busy or hard failure

    Args:
        exc (OSError): Error raised by open() or write()

    Returns:
        SpeakerError: SpeakerBusyError for contention, SpeakerDeviceError otherwise
    """
    if exc.errno in BUSY_ERRNOS:
        return SpeakerBusyError(str(exc))
    return SpeakerDeviceError(str(exc))


def attempt_write(melody: str, device_path: str) -> None:
    """Write the melody to the device in one open-write-close cycle.

    Blocking, run it on a worker thread from async code.

    Args:
        melody (str): Melody text, written as UTF-8
        device_path (str): Path of the speaker device

    Raises:
        SpeakerBusyError: The device is held by another writer
        SpeakerDeviceError: Any other failure, including a partial write
    """
    data = melody.encode("utf-8")
    try:
        fd = os.open(device_path, os.O_WRONLY)
    except OSError as exc:
        raise classify_os_error(exc) from exc

    try:
        written = os.write(fd, data)
    except OSError as exc:
        try:
            os.close(fd)
        except OSError as close_exc:
            logging.debug(f"Closing {device_path} after a failed write failed too: {close_exc}")
        raise classify_os_error(exc) from exc

    # The bytes may already be consumed, so a failing close is never retried
    try:
        os.close(fd)
    except OSError as exc:
        raise SpeakerDeviceError(str(exc)) from exc

    if written != len(data):
        raise SpeakerDeviceError(f"Partial write: {written} of {len(data)} bytes")
    logging.debug(f"Wrote {written} bytes to {device_path}")
