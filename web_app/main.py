"""
CAD Risk Assessor - Web Application

Scores patient health metrics against a fixed point rule and returns a
coronary artery disease risk label.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from web_app.api import assessment
from web_app.config import config

logging.basicConfig(level=logging.INFO)

# Create FastAPI app
app = FastAPI(
    title="CAD Risk Assessor",
    description="Heuristic coronary artery disease risk assessment",
    version="1.0.0"
)

# Include assessment API routes
app.include_router(assessment.router)

# CORS middleware - restricted to configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


@app.get("/")
async def root():
    return {"message": "CAD Risk Assessor", "status": "running", "docs": "/docs"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    port = int(config.BACKEND_PORT) if config.BACKEND_PORT else 8000
    uvicorn.run(app, host="0.0.0.0", port=port)
