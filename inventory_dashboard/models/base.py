import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    return uuid.uuid4().hex


class BaseEntity(BaseModel):
    """
    Fields shared by every stored entity. Instances are frozen: the store
    replaces an entity with an updated copy instead of editing it in place.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
