from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from datetime import datetime
from typing import Optional


class CamelModel(BaseModel):
    # Accept and emit camelCase on the wire, snake_case in Python.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterUserRequest(CamelModel):
    email: str
    password: str
    full_name: Optional[str] = None


class LoginUserRequest(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    token: str
    expires_in: int


class UserResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    email: str
    full_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
