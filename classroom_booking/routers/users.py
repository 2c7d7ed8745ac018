import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from classroom_booking.db import get_db
from classroom_booking.models.user import User
from classroom_booking.schemas.user import UserCreate, UserUpdate, UserResponse
from classroom_booking.utils.auth import get_current_user, get_password_hash, is_admin, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


def get_user_for(db: Session, user_id: int, current_user: dict) -> User:
    """Fetch a user that is the caller, or any user for administrators."""
    if not is_admin(current_user) and current_user["id"] != user_id:
        logger.error(f"User {current_user['id']} not authorized to access user {user_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.error(f"User not found: {user_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/", response_model=List[UserResponse])
def get_users(db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """
    List all users.
    Requires an administrator.
    """
    return db.query(User).order_by(User.id).all()


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    """
    Add a user with any role.
    Requires an administrator.
    """
    if db.query(User).filter(User.email == user.email).first():
        logger.error(f"Email already registered: {user.email}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    db_user = User(**user.model_dump(exclude={"password"}), hashed_password=get_password_hash(user.password))
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.debug(f"Created user: {db_user.id}, role: {db_user.role}")
    return db_user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return get_user_for(db, user_id, current_user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Update a profile.
    Users may edit themselves; role and status changes need an administrator.
    A new password is hashed before it is stored.
    """
    db_user = get_user_for(db, user_id, current_user)

    update_data = user_update.model_dump(exclude_unset=True)
    for key in ("name", "email", "password", "role", "status"):
        if key in update_data and update_data[key] is None:
            del update_data[key]

    if not is_admin(current_user):
        if "role" in update_data and update_data["role"] != db_user.role:
            logger.error(f"User {current_user['id']} tried to change role of user {user_id}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot change role")
        if "status" in update_data and update_data["status"] != db_user.status:
            logger.error(f"User {current_user['id']} tried to change status of user {user_id}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    if "email" in update_data and update_data["email"] != db_user.email:
        if db.query(User).filter(User.email == update_data["email"]).first():
            logger.error(f"Email already registered: {update_data['email']}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    if "password" in update_data:
        db_user.hashed_password = get_password_hash(update_data.pop("password"))
    for key, value in update_data.items():
        setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    logger.debug(f"Updated user: {user_id}")
    return db_user
