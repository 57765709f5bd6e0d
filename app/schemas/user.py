from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from app.schemas.stock import CamelModel

class UserUpsert(CamelModel):
    """Profile claims taken from a verified identity token."""
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None

class UserSchema(UserUpsert):
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
