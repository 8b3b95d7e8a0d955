"""
Application Workflow Service

Owns the application lifecycle and the chat unlock that comes with it:
- apply() records a pending application (duplicates are accepted)
- set_status() moves pending -> approved | declined, once
- approval writes a chat message from the business to the applicant

The status write and the message write are two independent documents;
there is no transaction spanning them.
"""

from typing import Optional

from udyog_saathi.core.exceptions import ApplicationNotFound, InvalidStatusTransition
from udyog_saathi.core.logging import get_logger
from udyog_saathi.models.application import approval_message_text, can_transition
from udyog_saathi.schemas.schemas import ApplicationStatus
from udyog_saathi.services.mongo_service import ApplicationService, MessageService

logger = get_logger(__name__)


class ApplicationWorkflow:

    def __init__(self, applications: ApplicationService = None, messages: MessageService = None):
        self.applications = applications or ApplicationService()
        self.messages = messages or MessageService()

    def apply(
        self,
        business_email: str,
        applicant_email: str,
        job_title: Optional[str],
        applicant_name: Optional[str] = None,
        applicant_contact: Optional[str] = None,
        job_id: Optional[str] = None,
    ) -> str:
        """Create a pending application and return its id."""
        application_id = self.applications.insert({
            "jobId": job_id,
            "jobTitle": job_title,
            "businessEmail": business_email,
            "applicantName": applicant_name,
            "applicantEmail": applicant_email,
            "applicantContact": applicant_contact,
        })
        logger.info("Application %s: %s -> %s (%s)", application_id, applicant_email, business_email, job_title)
        return application_id

    def set_status(self, application_id: str, new_status: ApplicationStatus) -> dict:
        """
        Transition an application out of pending.

        Re-sending the status an application already holds is a no-op and
        writes no second message. Any other move out of a terminal state
        raises InvalidStatusTransition.

        Raises:
            ApplicationNotFound: unknown or malformed id
            InvalidStatusTransition: e.g. approved -> declined
        """
        new_status = ApplicationStatus(new_status)
        if not can_transition(ApplicationStatus.pending, new_status):
            raise InvalidStatusTransition(ApplicationStatus.pending.value, new_status.value)

        # Conditional on status == pending, so concurrent approvals flip it once
        updated = self.applications.set_status_if(
            application_id, ApplicationStatus.pending.value, new_status.value
        )

        if updated is None:
            current = self.applications.get_by_id(application_id)
            if current is None:
                raise ApplicationNotFound(application_id)
            if current["status"] == new_status.value:
                logger.info("Application %s already %s", application_id, new_status.value)
                return current
            raise InvalidStatusTransition(current["status"], new_status.value)

        logger.info("Application %s -> %s", application_id, new_status.value)

        if new_status == ApplicationStatus.approved:
            try:
                self.messages.insert(
                    sender_email=updated["businessEmail"],
                    receiver_email=updated["applicantEmail"],
                    text=approval_message_text(updated.get("jobTitle") or "your request"),
                )
            except Exception:
                # Status is already approved; nothing rolls it back
                logger.exception("Approval message for application %s was not written", application_id)
                raise

        return updated

    def notifications_for(self, email: str) -> list:
        return self.applications.find_for_email(email)

    def clear_notifications(self, email: str) -> int:
        deleted = self.applications.clear_for_email(email)
        logger.info("Cleared %d applications for %s", deleted, email)
        return deleted


def get_application_workflow() -> ApplicationWorkflow:
    """FastAPI dependency."""
    return ApplicationWorkflow()
