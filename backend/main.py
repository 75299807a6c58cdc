# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config import settings
from database.session import Base, engine, SessionLocal
from database.demo_data import ensure_default_categories
import models  # noqa: F401  registers every table on Base.metadata

# single entry point for every business router, mounted under /api
from gateway.gateway_router import gateway_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("livraxpress")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("LivraXpress API is starting")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connected")
    except Exception as e:
        logger.error("Database connection failed: %s", e)

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            added = ensure_default_categories(db)
            if added:
                logger.info("Seeded %d default categories", added)
        finally:
            db.close()

    yield
    # Shutdown
    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="LivraXpress API",
        description="Delivery marketplace: clients, suppliers, couriers and admins",
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],        # restrict to the real front-end domains in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        status = {"status": "healthy", "service": "livraxpress-api", "version": VERSION}
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            status["database"] = "connected"
        except Exception as e:
            status["database"] = f"error: {e.__class__.__name__}"
            status["status"] = "degraded"
        return status

    @app.get("/")
    async def root():
        return {
            "message": "LivraXpress API",
            "version": VERSION,
            "api_base": "/api",
            "docs": "/docs",
            "endpoints": {"health": "/health", "auth": "/api/auth/login"},
        }

    app.include_router(gateway_router, prefix="/api")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
