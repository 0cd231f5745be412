import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_RETRY_TIMEOUT = 30.0
DEFAULT_DEVICE = "/dev/speaker"
DEFAULT_PIDFILE = "/var/run/spkrd.pid"

TRUE_VALUES = ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Server-wide configuration. Built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    retry_timeout: float = Field(default=DEFAULT_RETRY_TIMEOUT, ge=0)
    device_path: str = DEFAULT_DEVICE
    debug: bool = False
    daemon: bool = False
    pidfile: str = DEFAULT_PIDFILE


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUE_VALUES


def load_settings(**overrides) -> Settings:
    """Build the settings from the environment, then apply explicit overrides

    Args:
        **overrides: Values which take precedence over the environment (CLI arguments).
                     None values are ignored.

    Raises:
        ValueError: A value is out of range or cannot be converted

    Returns:
        Settings: The immutable settings
    """
    values = {
        "host": os.getenv("SPKRD_HOST", DEFAULT_HOST),
        "port": os.getenv("SPKRD_PORT", DEFAULT_PORT),
        "retry_timeout": os.getenv("SPKRD_RETRY_TIMEOUT", DEFAULT_RETRY_TIMEOUT),
        "device_path": os.getenv("SPKRD_DEVICE", DEFAULT_DEVICE),
        "debug": env_flag("SPKRD_DEBUG"),
        "daemon": env_flag("SPKRD_DAEMON"),
        "pidfile": os.getenv("SPKRD_PIDFILE", DEFAULT_PIDFILE),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**values)


if __name__ == "__main__":
    print(load_settings())
