import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from classroom_booking.db import get_db
from classroom_booking.models.building import Building
from classroom_booking.models.classroom import Classroom
from classroom_booking.schemas.building import BuildingCreate, BuildingUpdate, BuildingResponse
from classroom_booking.utils.auth import get_current_user, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/buildings",
    tags=["buildings"],
)


def get_building_or_404(db: Session, building_id: int) -> Building:
    building = db.query(Building).filter(Building.id == building_id).first()
    if not building:
        logger.error(f"Building not found: {building_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Building not found")
    return building


@router.get("/", response_model=List[BuildingResponse])
def get_buildings(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Retrieve a list of all buildings.
    """
    return db.query(Building).order_by(Building.id).offset(skip).limit(limit).all()


@router.get("/{building_id}", response_model=BuildingResponse)
def get_building(building_id: int, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    """
    Retrieve a specific building by ID.
    """
    return get_building_or_404(db, building_id)


@router.post("/", response_model=BuildingResponse, status_code=status.HTTP_201_CREATED)
def create_building(building: BuildingCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """
    Create a new building.
    Requires an administrator.
    """
    db_building = Building(**building.model_dump())
    db.add(db_building)
    db.commit()
    db.refresh(db_building)
    logger.debug(f"Created building: {db_building.id}")
    return db_building


@router.put("/{building_id}", response_model=BuildingResponse)
def update_building(
    building_id: int,
    building_update: BuildingUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """
    Update a building's details.
    Requires an administrator.
    """
    db_building = get_building_or_404(db, building_id)

    update_data = building_update.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(db_building, key, value)

    db.commit()
    db.refresh(db_building)
    logger.debug(f"Updated building: {building_id}")
    return db_building


@router.delete("/{building_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_building(building_id: int, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """
    Delete a building that has no classrooms left.
    Requires an administrator.
    """
    db_building = get_building_or_404(db, building_id)

    if db.query(Classroom).filter(Classroom.building_id == building_id).first():
        logger.error(f"Building {building_id} still has classrooms")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete building with existing classrooms",
        )

    db.delete(db_building)
    db.commit()
    logger.debug(f"Deleted building: {building_id}")
    return None
