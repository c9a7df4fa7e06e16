from typing import Literal
from pydantic import BaseModel, ConfigDict

Role = Literal["admin", "staff"]


class LoginPayload(BaseModel):
    password: str
    model_config = ConfigDict(extra="forbid")


class LoginResponse(BaseModel):
    role: Role
