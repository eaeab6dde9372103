# lms_nav/models/switch_state.py

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------
# SWITCH STATES (tagged on `status`)
# ---------------------------------------------------------
class SwitchIdle(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class Switching(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["switching"] = "switching"
    target_id: str


class SwitchError(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    target_id: str
    message: str


DepartmentSwitchState = Annotated[
    Union[SwitchIdle, Switching, SwitchError],
    Field(discriminator="status"),
]


# ---------------------------------------------------------
# OUTCOME OF ONE SWITCH ATTEMPT
# ---------------------------------------------------------
class SwitchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    department_id: Optional[str]
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls, department_id: Optional[str]) -> "SwitchResult":
        return cls(department_id=department_id, ok=True)

    @classmethod
    def failure(cls, department_id: str, message: str) -> "SwitchResult":
        return cls(department_id=department_id, ok=False, error=message)
