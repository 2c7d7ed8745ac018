from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class BuildingBase(BaseModel):
    name: str
    location: str
    description: str = ""
    floors: int = Field(1, ge=1)

class BuildingCreate(BuildingBase):
    pass

class BuildingUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    floors: Optional[int] = Field(None, ge=1)

class BuildingResponse(BuildingBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
