"""
System Routes

GET /health - Database reachability
GET /test-db - Listing counts with query timing
GET /test-collections - Collection names and whether the feeds hold any data
"""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from udyog_saathi.core.logging import get_logger
from udyog_saathi.db.mongodb import get_mongo_db, test_mongo_connection
from udyog_saathi.services.mongo_service import JobService, WorkerProfileService

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


@router.get("/health")
async def health_check():
    return {"status": "healthy", "db": "connected" if test_mongo_connection() else "disconnected"}


@router.get("/test-db")
async def test_db():
    """Count documents in the two main feeds and report how long it took."""
    started = time.monotonic()
    try:
        job_count = JobService().count()
        worker_count = WorkerProfileService().count()
    except PyMongoError as e:
        logger.error("DB test error: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})
    elapsed_ms = (time.monotonic() - started) * 1000
    return {"jobCount": job_count, "workerCount": worker_count, "queryTime": f"{elapsed_ms:.0f}ms"}


@router.get("/test-collections")
async def test_collections():
    """
    List the collections and check that jobs and worker profiles can be sampled.
    A failed sample is logged and reported as False.
    """
    started = time.monotonic()
    try:
        names = get_mongo_db().list_collection_names()
    except PyMongoError as e:
        logger.error("Collection listing failed: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    samples = {}
    for key, service in (("jobExists", JobService()), ("workerExists", WorkerProfileService())):
        try:
            samples[key] = service.has_any()
        except PyMongoError as e:
            logger.warning("%s sample query failed: %s", key, e)
            samples[key] = False

    elapsed_ms = (time.monotonic() - started) * 1000
    return {"collections": names, **samples, "queryTime": f"{elapsed_ms:.0f}ms"}
