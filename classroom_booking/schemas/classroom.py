from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class ClassroomBase(BaseModel):
    building_id: int
    name: str
    capacity: int = Field(0, ge=0)
    floor: int = 1
    has_projector: bool = False
    has_ac: bool = False
    is_computer_lab: bool = False
    description: str = ""

class ClassroomCreate(ClassroomBase):
    pass

class ClassroomUpdate(BaseModel):
    building_id: Optional[int] = None
    name: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    floor: Optional[int] = None
    has_projector: Optional[bool] = None
    has_ac: Optional[bool] = None
    is_computer_lab: Optional[bool] = None
    description: Optional[str] = None

class ClassroomResponse(ClassroomBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
