from typing import Optional
from pydantic import BaseModel
from datetime import datetime

DEFAULT_PROJECT_COLOR = "#7E3DD4"


class ProjectBase(BaseModel):
    name: str
    color: str = DEFAULT_PROJECT_COLOR


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class ProjectRead(ProjectBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
