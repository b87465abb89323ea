from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from .base import new_id


class ActivityLog(BaseModel):
    """Audit entry appended by the store for every tracked mutation."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    user_id: str
    action: str # e.g. 'created', 'updated', 'deleted'
    entity_type: str # e.g. 'supplier', 'product', 'order'
    entity_id: str
    timestamp: datetime = Field(default_factory=datetime.now)
    details: str


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    type: NotificationType
    title: str
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)
    read: bool = False
