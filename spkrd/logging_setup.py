import logging
import logging.handlers
import os
import sys

SYSLOG_SOCKETS = ("/dev/log", "/var/run/log")


def syslog_address() -> str | tuple[str, int]:
    for path in SYSLOG_SOCKETS:
        if os.path.exists(path):
            return path
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


def setup_logging(debug: bool = False, use_syslog: bool = False) -> None:
    """Configure the root logger.

    Args:
        debug: If True, log at DEBUG level instead of INFO.
        use_syslog: If True, send records to the local syslog daemon (daemon mode).
                    Otherwise write them to stderr.
    """
    if use_syslog:
        handler = logging.handlers.SysLogHandler(
            address=syslog_address(),
            facility=logging.handlers.SysLogHandler.LOG_DAEMON,
        )
        handler.setFormatter(logging.Formatter("spkrd[%(process)d]: %(levelname)s %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[handler],
        force=True,
    )
