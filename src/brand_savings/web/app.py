"""
Brand Savings Web - FastAPI application.

Serves the intake router for the calculator page.
"""

import logging

from fastapi import FastAPI

from brand_savings import __version__
from intake.api import router as intake_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Brand Savings Calculator", version=__version__)
app.include_router(intake_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
