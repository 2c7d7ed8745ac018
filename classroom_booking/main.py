import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from classroom_booking.config import settings
from classroom_booking.db import SessionLocal, init_database
from classroom_booking.routers import auth, availability, bookings, buildings, classrooms, users
from classroom_booking.seed import seed_demo_data

# Configure logging
logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database"
    init_database()
    if settings.seed_demo_data:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Classroom booker",
    description="Classroom booking service with conflict-free scheduling, based on FastAPI.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth.router)
app.include_router(buildings.router)
app.include_router(classrooms.router)
app.include_router(bookings.router)
app.include_router(availability.router)
app.include_router(users.router)
