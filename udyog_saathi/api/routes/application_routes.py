"""
Application Routes (the notification list)

POST /apply - Apply with full application fields
POST /notifications - Apply from a feed card ({toEmail, fromEmail, fromName, title})
GET /notifications/{email} - Applications sent or received, newest first
DELETE /notifications/clear/{email} - Bulk clear
PUT /application-status/{id} - Approve or decline (approval unlocks chat)
PUT /notifications/{id} - Same transition, older client path
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from udyog_saathi.core.logging import get_logger
from udyog_saathi.services.application_workflow import ApplicationWorkflow, get_application_workflow
from udyog_saathi.schemas.schemas import (
    ApplicationCreate, NotificationCreate, ApplicationStatusUpdate, ApplicationResponse, AckResponse
)

router = APIRouter(tags=["Applications"])
logger = get_logger(__name__)


@router.post("/apply", response_model=AckResponse)
async def apply(application: ApplicationCreate, workflow: ApplicationWorkflow = Depends(get_application_workflow)):
    """Create a pending application. Duplicates are accepted."""
    workflow.apply(
        business_email=application.business_email,
        applicant_email=application.applicant_email,
        job_title=application.job_title,
        applicant_name=application.applicant_name,
        applicant_contact=application.applicant_contact,
        job_id=application.job_id,
    )
    return AckResponse(msg="Applied!")


@router.post("/notifications", response_model=AckResponse)
async def create_notification(
    notification: NotificationCreate,
    workflow: ApplicationWorkflow = Depends(get_application_workflow)
):
    try:
        workflow.apply(
            business_email=notification.to_email,
            applicant_email=notification.from_email,
            job_title=notification.title,
            applicant_name=notification.from_name,
        )
    except PyMongoError:
        logger.exception("Failed to record application from %s", notification.from_email)
        return JSONResponse(status_code=500, content={"success": False})
    return AckResponse(msg="Applied!")


@router.get("/notifications/{email}", response_model=List[ApplicationResponse])
async def list_notifications(email: str, workflow: ApplicationWorkflow = Depends(get_application_workflow)):
    """
    Applications where email is the business or the applicant.

    One undifferentiated list; the viewer's role per record is derived by
    comparing emails.
    """
    try:
        return workflow.notifications_for(email)
    except PyMongoError:
        logger.exception("Notification query failed for %s", email)
        return JSONResponse(status_code=500, content=[])


@router.delete("/notifications/clear/{email}", response_model=AckResponse)
async def clear_notifications(email: str, workflow: ApplicationWorkflow = Depends(get_application_workflow)):
    try:
        workflow.clear_notifications(email)
    except PyMongoError:
        logger.exception("Clear failed for %s", email)
        return JSONResponse(status_code=500, content={"error": "Clear failed"})
    return AckResponse(msg="cleared")


@router.put("/application-status/{application_id}", response_model=AckResponse)
async def set_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    workflow: ApplicationWorkflow = Depends(get_application_workflow)
):
    """
    Approve or decline a pending application.

    Approval also posts a chat message from the business to the applicant.
    404 for unknown ids, 409 for moves out of a terminal state.
    """
    workflow.set_status(application_id, update.status)
    return AckResponse(msg="done")


@router.put("/notifications/{application_id}", response_model=AckResponse)
async def update_notification(
    application_id: str,
    update: ApplicationStatusUpdate,
    workflow: ApplicationWorkflow = Depends(get_application_workflow)
):
    workflow.set_status(application_id, update.status)
    return AckResponse(msg="done")
