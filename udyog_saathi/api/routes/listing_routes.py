"""
Listing Routes

GET /jobs, /worker-profiles, /instant-services - Capped feeds (cache fallback on failure)
POST /jobs, /worker-profile, /post-instant - Create a listing
DELETE /delete/{type}/{id} - Delete a listing (type: worker | job | instant)
POST /add-comment/{post_id} - Comment on a job or worker profile
POST /like/{post_id} - Toggle a like on a job or worker profile
GET /user-activity/{email} - Everything a user has posted
"""

from typing import List

from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from udyog_saathi.core.logging import get_logger
from udyog_saathi.services.feed_cache import FeedCache, FeedCaches
from udyog_saathi.services.mongo_service import (
    JobService, WorkerProfileService, InstantServiceService, get_listing_service
)
from udyog_saathi.schemas.schemas import (
    JobCreate, WorkerProfileCreate, InstantServiceCreate, CommentCreate, LikeToggle,
    ListingType, UserActivityResponse, AckResponse
)

router = APIRouter(tags=["Listings"])
logger = get_logger(__name__)


def get_feed_caches(request: Request) -> FeedCaches:
    """Dependency - the feed caches owned by this app instance."""
    return request.app.state.feed_caches


def _serve_feed(cache: FeedCache, service) -> List[dict]:
    # FeedUnavailable propagates to the app-level handler
    return cache.fetch(service.list_recent)


# ============================================================
# FEEDS
# ============================================================

@router.get("/jobs")
async def list_jobs(caches: FeedCaches = Depends(get_feed_caches)):
    """Latest jobs. Falls back to the last good result if the store fails."""
    return _serve_feed(caches.jobs, JobService())


@router.get("/worker-profiles")
async def list_worker_profiles(caches: FeedCaches = Depends(get_feed_caches)):
    return _serve_feed(caches.workers, WorkerProfileService())


@router.get("/instant-services")
async def list_instant_services(caches: FeedCaches = Depends(get_feed_caches)):
    return _serve_feed(caches.instant, InstantServiceService())


# ============================================================
# CREATE / DELETE
# ============================================================

@router.post("/jobs", response_model=AckResponse)
async def create_job(job: JobCreate):
    """Post a job. Owner identity comes from the body."""
    try:
        JobService().insert(job.model_dump(by_alias=True))
    except PyMongoError:
        logger.exception("Failed to post job")
        return JSONResponse(status_code=500, content={"error": "Failed to post job"})
    return AckResponse(msg="ok")


@router.post("/worker-profile", response_model=AckResponse)
async def create_worker_profile(profile: WorkerProfileCreate):
    try:
        WorkerProfileService().insert(profile.model_dump(by_alias=True))
    except PyMongoError:
        logger.exception("Failed to post worker profile")
        return JSONResponse(status_code=500, content={"error": "Failed to post profile"})
    return AckResponse(msg="ok")


@router.post("/post-instant", response_model=AckResponse)
async def create_instant_service(service: InstantServiceCreate):
    try:
        InstantServiceService().insert(service.model_dump(by_alias=True))
    except PyMongoError:
        logger.exception("Failed to save instant service")
        return JSONResponse(status_code=500, content={"error": "Database save failed"})
    return AckResponse(msg="ok")


@router.delete("/delete/{listing_type}/{listing_id}", response_model=AckResponse)
async def delete_listing(listing_type: ListingType, listing_id: str):
    """Delete a listing. Deleting an id that does not exist is not an error."""
    service = get_listing_service(listing_type.value)
    deleted = service.delete(listing_id)
    if not deleted:
        logger.info("Delete %s/%s matched nothing", listing_type.value, listing_id)
    return AckResponse(msg="deleted")


# ============================================================
# SOCIAL (comments + likes)
# ============================================================

def _social_services():
    return [JobService(), WorkerProfileService()]


@router.post("/add-comment/{post_id}", response_model=AckResponse)
async def add_comment(post_id: str, comment: CommentCreate):
    """Append a comment to whichever feed holds post_id."""
    for service in _social_services():
        if service.add_comment(post_id, comment.user_name, comment.text):
            return AckResponse(msg="commented")
    raise HTTPException(status_code=404, detail="Post not found")


@router.post("/like/{post_id}")
async def toggle_like(post_id: str, like: LikeToggle):
    """Like or unlike a post; returns the new like count."""
    for service in _social_services():
        likes = service.toggle_like(post_id, like.email)
        if likes is not None:
            return {"msg": "ok", "likes": likes}
    raise HTTPException(status_code=404, detail="Post not found")


# ============================================================
# USER ACTIVITY
# ============================================================

@router.get("/user-activity/{email}", response_model=UserActivityResponse)
async def user_activity(email: str):
    """Jobs and worker profiles under posts, instant services separately."""
    try:
        jobs = JobService().list_by_owner(email)
        skills = WorkerProfileService().list_by_owner(email)
        instant = InstantServiceService().list_by_owner(email)
    except PyMongoError:
        logger.exception("User activity query failed for %s", email)
        return JSONResponse(status_code=500, content={"posts": [], "instant": []})
    return UserActivityResponse(posts=jobs + skills, instant=instant)
