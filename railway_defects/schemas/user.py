from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from railway_defects.models.user import Role


class UserCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    email: EmailStr
    role: Role = Role.INSPECTOR
    department: str
    expertise: List[str] = Field(default_factory=list)
    phone_number: Optional[str] = None
    password: str
    is_active: bool = True

    @field_validator("name", "department", "password")
    @classmethod
    def required(cls, value: str, info) -> str:
        if not value.strip():
            raise ValueError(f"{info.field_name} is required")
        return value.strip() if info.field_name != "password" else value


class UserStatusUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_active: bool
