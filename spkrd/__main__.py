"""
spkrd entry point

Run with: python -m spkrd --port 8080 --device /dev/speaker
"""

import argparse
import logging
import os

import uvicorn

from spkrd.daemon import daemonize, remove_pidfile, write_pidfile
from spkrd.load_settings import load_settings
from spkrd.logging_setup import setup_logging
from spkrd.main import create_app


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Network server for a speaker device")
    parser.add_argument("--host", type=str, help="Address to bind (default 0.0.0.0)")
    parser.add_argument("-p", "--port", type=int, help="Port to listen on (default 8080)")
    parser.add_argument(
        "-r", "--retry-timeout", type=float, help="Retry timeout in seconds (default 30)"
    )
    parser.add_argument(
        "-d", "--device", type=str, help="Path to speaker device (default /dev/speaker)"
    )
    parser.add_argument(
        "--debug", action="store_true", default=None, help="Enable debug logging"
    )
    parser.add_argument(
        "--daemon",
        action="store_true",
        default=None,
        help="Detach from the terminal and log to syslog",
    )
    parser.add_argument("--pidfile", type=str, help="PID file written in daemon mode")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = get_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(
            host=args.host,
            port=args.port,
            retry_timeout=args.retry_timeout,
            device_path=args.device,
            debug=args.debug,
            daemon=args.daemon,
            pidfile=args.pidfile,
        )
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    setup_logging(debug=settings.debug, use_syslog=settings.daemon)

    # daemonize() changes the working directory to /
    pidfile = os.path.abspath(settings.pidfile)
    if settings.daemon:
        daemonize()
        write_pidfile(pidfile)

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_config=None,
            log_level="debug" if settings.debug else "info",
        )
    finally:
        if settings.daemon:
            remove_pidfile(pidfile)
        logging.info("spkrd exited")


if __name__ == "__main__":
    main()
