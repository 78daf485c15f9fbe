import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import CORS_ORIGINS, DATABASE_URL, DEBUG, DEFAULT_LOCALE, HOST, LOG_LEVEL, PORT
from .database import init_db, ping_db
from .routes.consultations import router as consultations_router
from .routes.contacts import router as contacts_router
from .routes.users import router as users_router
from .routes.wizard import router as wizard_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    print("Starting NGC Project Intake API")
    print(f"   Database:    {DATABASE_URL.split('@')[-1]}")
    print(f"   Locale:      {DEFAULT_LOCALE}")
    print(f"   CORS:        {', '.join(CORS_ORIGINS) or 'none'}")

    if ping_db():
        init_db()
        print("   Ready to take project requests!")
    else:
        logger.error("[STARTUP] Database unreachable, running degraded")

    yield

    print("Shutting down NGC Project Intake API")


app = FastAPI(
    title="NGC Project Intake API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(wizard_router)
app.include_router(consultations_router)
app.include_router(contacts_router)
app.include_router(users_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "NGC Project Intake",
        "version": __version__,
        "description": "Project intake wizard, estimates and consultation records",
        "docs": "/docs",
        "endpoints": {
            "wizard": "POST /wizard/sessions - Start an intake session",
            "consultations": "POST /consultations - Submit a project consultation",
            "contacts": "POST /contacts - Submit the contact form",
            "health": "GET /health - Service health check",
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server and its database are up",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy" if ping_db() else "degraded",
        "service": "ngc-intake",
        "version": __version__,
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception("[API] Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if DEBUG else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ngc_intake.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )
