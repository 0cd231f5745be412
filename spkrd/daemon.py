import logging
import os
import sys


def daemonize() -> None:
    """Detach from the controlling terminal (double fork).

    The parent processes exit, the surviving grandchild runs in its own session
    with the working directory at / and stdio on /dev/null.
    """
    if os.fork() > 0:
        os._exit(0)
    os.setsid()
    if os.fork() > 0:
        os._exit(0)

    os.chdir("/")
    os.umask(0o022)

    sys.stdout.flush()
    sys.stderr.flush()
    devnull = os.open(os.devnull, os.O_RDWR)
    for fd in (0, 1, 2):
        os.dup2(devnull, fd)
    os.close(devnull)


def write_pidfile(path: str) -> None:
    with open(path, "w") as f:
        f.write(f"{os.getpid()}\n")
    logging.info(f"Wrote pid {os.getpid()} to {path}")


def remove_pidfile(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logging.error(f"Failed to remove pid file {path}: {e}")
