"""Records for jobs, presses and the rest of the shop's collections.

Stored documents use camelCase keys (``pressId``, ``createdAt``); the models
expose snake_case attributes with aliases so both spellings validate.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


UNASSIGNED_PRESS_ID = "unassigned"


class JobStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class FilterMode(str, Enum):
    ALL = "all"
    OPEN = "open"
    COMPLETED = "completed"
    HOT = "hot"


class SortMode(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Record(BaseModel):
    """Base for stored documents: keeps unknown keys, accepts either key style."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def to_document(self) -> Dict[str, Any]:
        """Serialize with the stored (camelCase) keys."""
        return self.model_dump(by_alias=True, mode="json")


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Job(Record):
    """A unit of print work."""
    title: str
    quantity: int = 1
    hot: bool = False
    status: JobStatus = JobStatus.OPEN
    press_id: Optional[str] = Field(None, alias="pressId")
    press_name: Optional[str] = Field(None, alias="pressName")
    front_color_1: Optional[str] = Field(None, alias="frontColor1")
    front_color_2: Optional[str] = Field(None, alias="frontColor2")
    back_color_1: Optional[str] = Field(None, alias="backColor1")
    back_color_2: Optional[str] = Field(None, alias="backColor2")
    plate_bin: Optional[str] = Field(None, alias="plateBin")
    notes: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    created_by: Optional[Dict[str, Any]] = Field(None, alias="createdBy")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")

    @field_validator("created_at", "updated_at", "completed_at")
    @classmethod
    def _naive_is_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class Press(Record):
    """A physical printing device jobs are assigned to."""
    name: str
    description: Optional[str] = ""
    press_type: Optional[str] = Field(None, alias="pressType")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class PressGroup(BaseModel):
    """One column of the press board."""
    press: Press
    jobs: List[Job] = Field(default_factory=list)


class Color(Record):
    name: str
    hex: str


class UserProfile(Record):
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def summary(self) -> Dict[str, Any]:
        """Fields copied onto jobs as ``createdBy``."""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.value,
        }


class AppSettings(BaseModel):
    """Singleton ``settings/app`` document."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    show_press_images: bool = Field(False, alias="showPressImagesInPressView")
