from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from database import Base, engine, settings, SessionLocal
from api import venues, participants, events, schedules, reports
from services.seed_service import seed_sample_data

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: 在應用啟動時建立資料庫表
    Base.metadata.create_all(bind=engine)

    if settings.seed_sample_data:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()

    yield


app = FastAPI(
    title="Tournament Scheduling API",
    description="Venues, participants, events, live schedule with change history, and results",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this properly in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(venues.router)
app.include_router(participants.router)
app.include_router(events.router)
app.include_router(schedules.router)
app.include_router(reports.router)


@app.get("/")
def root():
    return {"message": "Tournament Scheduling API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
