import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from blogadmin.db.base import Base, engine
from blogadmin.models import post  # noqa: F401  registers the Posts table
from blogadmin.routers import admin, posts
from blogadmin.security import get_api_key
from blogadmin.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_tables():
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Posts table ready")
    yield


app = FastAPI(
    title="Blog Admin API",
    description="Post management over a posts table and a markdown repository",
    lifespan=lifespan,
)

app.include_router(posts.router, dependencies=[Depends(get_api_key)])
app.include_router(admin.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Blog Admin API is running"}
