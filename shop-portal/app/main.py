"""
Shop Portal Application

Customer "my page" for the course shop: enrollments dashboard, product
catalog and cart, plus the image upload endpoint used by catalog management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.errors import PortalError
from .routes import (
    products_router,
    cart_router,
    account_router,
    upload_router,
    pages_router,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Shop Portal starting up...")
    logger.info(f"Image uploads: {'enabled' if settings.cloudinary_configured else 'not configured'}")
    yield
    logger.info("Shop Portal shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Customer my page: enrollments, shop catalog and cart",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(account_router)
app.include_router(upload_router)
app.include_router(pages_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": "Shop Portal API",
        "docs": "/docs",
        "pages": {
            "dashboard": "/mypage",
            "shop": "/mypage/shop",
        },
        "endpoints": {
            "products": "/api/products",
            "categories": "/api/categories",
            "cart": "/api/cart",
            "enrollments": "/api/customer-enrollments",
            "system_settings": "/api/system-settings",
            "upload": "/api/upload",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "shop-portal",
        "uploads_configured": settings.cloudinary_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
