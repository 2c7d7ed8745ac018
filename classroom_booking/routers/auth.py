import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from classroom_booking.db import get_db
from classroom_booking.models.user import User
from classroom_booking.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from classroom_booking.utils.auth import (
    create_access_token,
    get_current_user,
    get_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=TokenResponse, summary="Log in with email and password")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange an email and password for a bearer token.

    Returns the token together with the user's profile.
    """
    user = db.query(User).filter(User.email == credentials.email).first()
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.error(f"Failed login for email: {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    if user.status != "active":
        logger.error(f"Inactive user tried to log in: {user.id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")

    logger.debug(f"User logged in: {user.id}")
    return {"access_token": create_access_token(user), "token_type": "bearer", "user": user}


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a teacher account",
)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create a teacher account and log it in.
    Administrator accounts are created through /users.
    """
    if db.query(User).filter(User.email == data.email).first():
        logger.error(f"Email already registered: {data.email}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    user = User(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        role="teacher",
        status="active",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.debug(f"Registered user: {user.id}")
    return {"access_token": create_access_token(user), "token_type": "bearer", "user": user}


@router.get("/user", response_model=UserResponse, summary="Current user")
def read_current_user(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    user = db.query(User).filter(User.id == current_user["id"]).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
