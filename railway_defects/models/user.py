from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    INSPECTOR = "inspector"
    MAINTENANCE = "maintenance"
    ENGINEER = "engineer"
    TEAM = "team"
    ADMIN = "admin"


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    role: str = Role.INSPECTOR.value  # unknown roles from the store are kept as-is
    department: Optional[str] = None  # section, team or station depending on role
    expertise: List[str] = Field(default_factory=list)
    phone_number: Optional[str] = None
    is_active: bool = False
