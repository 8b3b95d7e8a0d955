"""
Udyog Saathi - Main Application

FastAPI backend with:
- MongoDB for every entity (accounts, listings, applications, messages)
- Best-effort feed cache used only when a feed query fails
- Hosted LLM for career guidance
- Cloudinary for image uploads

Run: uvicorn udyog_saathi.main:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from udyog_saathi.api.routes import api_router
from udyog_saathi.core.exceptions import UdyogError
from udyog_saathi.core.logging import get_logger
from udyog_saathi.db.mongodb import init_mongo_indexes
from udyog_saathi.services.feed_cache import FeedCaches, FeedUnavailable

logger = get_logger("udyog_saathi")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Udyog Saathi",
        description="""
        Marketplace connecting informal-sector workers and businesses.

        ## Features
        - **Accounts**: Worker and Business signup/login
        - **Feeds**: Jobs, worker profiles and instant services
        - **Applications**: Apply, approve or decline; approval unlocks chat
        - **Chat**: Polled message history between two users
        - **Assistant**: AI career guidance and image upload
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.feed_caches = FeedCaches()
    app.include_router(api_router, prefix="/api")

    @app.exception_handler(UdyogError)
    async def udyog_error_handler(request: Request, exc: UdyogError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(FeedUnavailable)
    async def feed_unavailable_handler(request: Request, exc: FeedUnavailable):
        return JSONResponse(status_code=500, content={"error": str(exc.cause), "timeout": True})

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error("Unhandled database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Database operation failed"})

    @app.on_event("startup")
    async def startup_event():
        """Initialize MongoDB indexes on startup."""
        try:
            init_mongo_indexes()
        except PyMongoError as e:
            logger.warning("MongoDB index initialization failed: %s", e)

    @app.get("/", tags=["Health"])
    async def root():
        return {"status": "healthy", "app": "Udyog Saathi", "message": "Server is working!"}

    return app


app = create_app()
