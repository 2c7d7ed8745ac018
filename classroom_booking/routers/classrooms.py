import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from classroom_booking.db import get_db
from classroom_booking.models.booking import Booking
from classroom_booking.models.building import Building
from classroom_booking.models.classroom import Classroom
from classroom_booking.schemas.classroom import ClassroomCreate, ClassroomUpdate, ClassroomResponse
from classroom_booking.utils.auth import get_current_user, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/classrooms",
    tags=["classrooms"],
)


def get_classroom_or_404(db: Session, classroom_id: int) -> Classroom:
    classroom = db.query(Classroom).filter(Classroom.id == classroom_id).first()
    if not classroom:
        logger.error(f"Classroom not found: {classroom_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Classroom not found")
    return classroom


def ensure_building_exists(db: Session, building_id: int):
    if not db.query(Building).filter(Building.id == building_id).first():
        logger.error(f"Building not found: {building_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Building not found")


@router.get("/", response_model=List[ClassroomResponse])
def get_classrooms(
    building_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Retrieve classrooms, optionally only those of one building.
    """
    query = db.query(Classroom)
    if building_id is not None:
        query = query.filter(Classroom.building_id == building_id)
    return query.order_by(Classroom.id).offset(skip).limit(limit).all()


@router.get("/{classroom_id}", response_model=ClassroomResponse)
def get_classroom(classroom_id: int, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    """
    Retrieve a specific classroom by ID.
    """
    return get_classroom_or_404(db, classroom_id)


@router.post("/", response_model=ClassroomResponse, status_code=status.HTTP_201_CREATED)
def create_classroom(classroom: ClassroomCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """
    Create a new classroom in an existing building.
    Requires an administrator.
    """
    ensure_building_exists(db, classroom.building_id)

    db_classroom = Classroom(**classroom.model_dump())
    db.add(db_classroom)
    db.commit()
    db.refresh(db_classroom)
    logger.debug(f"Created classroom: {db_classroom.id} in building {db_classroom.building_id}")
    return db_classroom


@router.put("/{classroom_id}", response_model=ClassroomResponse)
def update_classroom(
    classroom_id: int,
    classroom_update: ClassroomUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """
    Update a classroom's details.
    Requires an administrator.
    """
    db_classroom = get_classroom_or_404(db, classroom_id)

    update_data = classroom_update.model_dump(exclude_unset=True, exclude_none=True)
    if "building_id" in update_data:
        ensure_building_exists(db, update_data["building_id"])
    for key, value in update_data.items():
        setattr(db_classroom, key, value)

    db.commit()
    db.refresh(db_classroom)
    logger.debug(f"Updated classroom: {classroom_id}")
    return db_classroom


@router.delete("/{classroom_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_classroom(classroom_id: int, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """
    Delete a classroom that has no bookings.
    Requires an administrator.
    """
    db_classroom = get_classroom_or_404(db, classroom_id)

    if db.query(Booking).filter(Booking.classroom_id == classroom_id).first():
        logger.error(f"Classroom {classroom_id} still has bookings")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete classroom with existing bookings",
        )

    db.delete(db_classroom)
    db.commit()
    logger.debug(f"Deleted classroom: {classroom_id}")
    return None
