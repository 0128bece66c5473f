# main.py - Liquid Validations API
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

# Import routers
from api.liquid_validations.controller import router as liquid_router
from api.liquid_validations.parser import LiquidParser

import uvicorn
from config import settings

# Setup logging
logging.basicConfig(
    level=settings.log_level_value,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    encoding='utf-8', 
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

def check_parser() -> bool:
    """Check the Liquid parser accepts a trivial template"""
    try:
        return LiquidParser().parse("{{ greeting }}") == []
    except Exception as e:
        logger.error(f"❌ Liquid parser check failed: {e}")
        return False

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    logger.info("=" * 80)
    logger.info("🚀 Liquid Validations API Starting...")
    logger.info("=" * 80)

    logger.info("🧪 Testing Liquid parser...")
    if not check_parser():
        logger.warning("⚠️  API will start but syntax validation may fail")

    logger.info("=" * 80)
    logger.info("✅ Liquid Validations API Started Successfully")
    logger.info("=" * 80)
    
    yield
    
    # Shutdown
    logger.info("=" * 80)
    logger.info("🛑 Liquid Validations API Shutting down...")
    logger.info("=" * 80)

app = FastAPI(
    title="Liquid Validations API",
    description="Structural validation of user-authored Liquid template snippets",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(liquid_router, prefix="/api/liquid-validations", tags=["Liquid Validations"])

@app.get("/", tags=["Root"])
async def root():
    """API Root - Welcome message"""
    return {
        "message": f"Liquid Validations API v{VERSION}",
        "status": "running",
        "documentation": "/docs",
        "redoc": "/redoc",
        "health": "/api/health"
    }

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    parser_healthy = check_parser()
    
    return {
        "status": "healthy" if parser_healthy else "degraded",
        "services": {
            "api": "healthy",
            "liquid_parser": "healthy" if parser_healthy else "unhealthy"
        },
        "version": VERSION
    }


if __name__ == "__main__": 
    logger.info(f"Starting server on {settings.API_HOST}:{settings.API_PORT}")
    
    uvicorn.run(
        app, 
        host=settings.API_HOST, 
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
