import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import SessionLocal
from app.api.api_v1.api import api_router
from app.initialization import ApplicationInitializer

# Initialize logger for uvicorn
uvicorn_logger = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""

    initializer = ApplicationInitializer(settings.SCHEMA_SNAPSHOT_PATH)

    try:
        uvicorn_logger.info("🚀 Starting Field Picker API initialization...")

        with SessionLocal() as db:
            uvicorn_logger.info("📊 Initializing schema database...")
            db_status = initializer.initialize_database(db, load_snapshot=settings.LOAD_SNAPSHOT_ON_STARTUP)

            if db_status["import_completed"]:
                if db_status.get("import_time", 0) > 0:
                    uvicorn_logger.info(f"⚡ Snapshot import completed in {db_status['import_time']:.2f}s")
            else:
                uvicorn_logger.warning("⚠️ Schema metadata not loaded; field trees will be empty")
                if "error" in db_status:
                    uvicorn_logger.error(f"❌ Error: {db_status['error']}")

            app.state.initialization_summary = initializer.get_initialization_summary(db)

        uvicorn_logger.info("🎉 Field Picker API initialization completed! 🚀")

        yield

    except Exception as e:
        uvicorn_logger.error(f"🔥 Startup error: {e}")
        import traceback
        uvicorn_logger.error(f"Full traceback: {traceback.format_exc()}")
        raise

# FastAPI app setup
app = FastAPI(
    title="Field Picker API",
    description="API for searching and picking fields of collection schemas with nested groups and relations",
    version="1.0.0",
    lifespan=lifespan
)

# CORS Middleware Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API Router Setup
app.include_router(api_router, prefix="/api/v1")

@app.get("/")
def read_root():
    """Root endpoint with API information."""
    return {
        "message": "Field Picker API is running!",
        "version": "1.0.0",
        "features": [
            "Field tree search across nested groups",
            "One-hop search into related collections",
            "Lazy relation branches",
            "Disabled-state annotation and bulk select",
            "Schema snapshot import",
        ],
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health")
def health_check():
    """Health check endpoint with schema status."""
    try:
        with SessionLocal() as db:
            initializer = ApplicationInitializer(settings.SCHEMA_SNAPSHOT_PATH)
            summary = initializer.get_initialization_summary(db)

            return {
                "status": "healthy",
                "version": "1.0.0",
                "components": {
                    "database": summary.get("database", {}),
                    "snapshot": summary.get("snapshot", {}),
                },
                "collections": summary.get("collections", []),
            }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
            "version": "1.0.0"
        }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
