# benigna-api/benigna/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from benigna import config
from benigna.core.errors import BenignaError
from benigna.db.session import get_repository
from benigna.routers import admin, auth, categories, donations, institutions, location, ratings, uploads
from benigna.services.seed import seed_defaults

config.configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    repo = app.dependency_overrides.get(get_repository, get_repository)()
    seed_defaults(repo)
    yield


app = FastAPI(
    title="Benigna API",
    description="API backend for Benigna, connecting donors with charitable institutions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BenignaError)
async def benigna_error_handler(request: Request, exc: BenignaError):
    logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Routers
app.include_router(auth.router)
app.include_router(institutions.router)
app.include_router(donations.router)
app.include_router(ratings.router)
app.include_router(categories.router)
app.include_router(admin.router)
app.include_router(location.router)
app.include_router(uploads.router)

app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR, check_dir=False), name="uploads")


@app.get("/")
async def root():
    return {"message": "Welcome to Benigna API, connecting donations to those who need them"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("benigna.main:app", host="0.0.0.0", port=8000, reload=True)
