"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from team_maker.config import settings
from team_maker.api.routes.team_maker import router as team_maker_router

app = FastAPI(
    title="Team Maker",
    description="LoL custom game team maker - balanced 5v5 splits with role assignment",
    version="0.1.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "team-maker"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Team Maker API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(team_maker_router)
