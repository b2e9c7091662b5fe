import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from handyman.api.routes import admin as admin_router
from handyman.api.routes import auth
from handyman.api.routes import services as services_router
from handyman.core.config import settings
from handyman.core.errors import register_exception_handlers
from handyman.core.observability import setup_logging
from handyman.db.base import Base, engine
from handyman.db.models import service, user  # noqa: F401  register tables on Base.metadata

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    if not settings.ADMIN_AUTH_REQUIRED:
        logger.warning("Admin and service catalog routes are open; set ADMIN_AUTH_REQUIRED to protect them")


@app.get("/")
def root():
    return {"message": "Handyman Services API running"}


@app.get("/api/health", tags=["health"])
def health():
    return {"status": "ok", "message": "Server is running"}


app.include_router(auth.router, prefix="/api/auth")
app.include_router(admin_router.router, prefix="/api")
app.include_router(services_router.router, prefix="/api")
