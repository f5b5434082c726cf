"""FastAPI application setup for the EcoSpace air-quality service."""

from fastapi import FastAPI

from .api import router as api_router

SERVICE_TITLE = "EcoSpace Air Quality"
SERVICE_VERSION = "0.1.0"

app = FastAPI(title=SERVICE_TITLE, version=SERVICE_VERSION)


@app.get("/")
def service_info():
    """Report the service name and version."""
    return {"service": SERVICE_TITLE, "version": SERVICE_VERSION}


# API routes
app.include_router(api_router, prefix="/v1")
