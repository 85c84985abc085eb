import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routes import completions_router, trees_router, wizard_router
from .services.mongo_service import mongo_service

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await mongo_service.connect()
    yield
    # Shutdown
    await mongo_service.close()


app = FastAPI(
    title=settings.app_name,
    description="Decision-tree eligibility wizard for government welfare schemes",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(wizard_router, prefix=settings.api_prefix)
app.include_router(completions_router, prefix=settings.api_prefix)
app.include_router(trees_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    mongo_healthy = await mongo_service.health_check()
    return {
        "status": "healthy" if mongo_healthy else "degraded",
        "service": "eligibility-wizard",
        "mongodb": mongo_healthy
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("eligibility_wizard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
