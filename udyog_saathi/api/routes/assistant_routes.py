"""
Assistant Routes - pass-through proxies

POST /career-guidance - Short career advice from the hosted LLM
POST /upload-image - Push an image to the CDN, return its URL
"""

from fastapi import APIRouter, Depends

from udyog_saathi.services.career_advisor import CareerAdvisor, get_career_advisor
from udyog_saathi.services.image_upload import upload_image
from udyog_saathi.schemas.schemas import (
    CareerGuidanceRequest, CareerGuidanceResponse, ImageUploadRequest, ImageUploadResponse
)

router = APIRouter(tags=["Assistant"])


@router.post("/career-guidance", response_model=CareerGuidanceResponse)
async def career_guidance(request: CareerGuidanceRequest, advisor: CareerAdvisor = Depends(get_career_advisor)):
    """Always answers; provider failures come back as a static reply."""
    name = request.user_details.get("name", "")
    reply = advisor.advise(name, request.query, request.lang)
    return CareerGuidanceResponse(ai_reply=reply)


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload(request: ImageUploadRequest):
    # 413 when oversized, 500 {"error": "Cloudinary Upload Failed"} when the CDN fails
    return ImageUploadResponse(url=upload_image(request.data))
