import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard import __version__
from taskboard.config import API_PREFIX, CORS_ORIGINS, HOST, LOG_LEVEL, PORT, SEED_DEMO_DATA
from taskboard.database import Base, SessionLocal, engine
from taskboard.errors import register_exception_handlers
from taskboard.logging_setup import setup_logging
from taskboard.routers import auth, tasks
from taskboard.seed import seed_demo_data

logger = logging.getLogger(__name__)


def startup():
    # create tables on first run
    Base.metadata.create_all(bind=engine)
    if SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    startup()
    logger.info("Taskboard API %s ready", __version__)
    yield


app = FastAPI(title="Taskboard", version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(tasks.router, prefix=API_PREFIX)


def serve():
    setup_logging(LOG_LEVEL)
    uvicorn.run("taskboard.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    serve()
