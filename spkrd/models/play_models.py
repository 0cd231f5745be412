from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Union
from uuid import UUID


class PlayRequest(BaseModel):
    request_id: UUID  # uuid7, correlates the log lines of one request
    melody: str
    client_host: str
    retry_timeout: float

    model_config = ConfigDict(frozen=True)


class Success(BaseModel):
    kind: Literal["success"] = "success"
    retries: int = Field(default=0, ge=0)  # busy attempts before the write went through


class InvalidMelody(BaseModel):
    kind: Literal["invalid_melody"] = "invalid_melody"
    reason: str


class DeviceBusyTimeout(BaseModel):
    kind: Literal["device_busy_timeout"] = "device_busy_timeout"
    retries: int = Field(default=0, ge=0)


class DeviceHardError(BaseModel):
    kind: Literal["device_hard_error"] = "device_hard_error"
    detail: str


PlayOutcome = Annotated[
    Union[Success, InvalidMelody, DeviceBusyTimeout, DeviceHardError],
    Field(discriminator="kind"),
]
