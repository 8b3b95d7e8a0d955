"""
Application lifecycle.

    pending ──► approved
       │
       └──────► declined

Both targets are terminal. Only the receiving business moves an
application, and it moves exactly once.
"""

from udyog_saathi.schemas.schemas import ApplicationStatus

ALLOWED_TRANSITIONS = {
    ApplicationStatus.pending: frozenset({ApplicationStatus.approved, ApplicationStatus.declined}),
    ApplicationStatus.approved: frozenset(),
    ApplicationStatus.declined: frozenset(),
}


def can_transition(current: ApplicationStatus, requested: ApplicationStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


def approval_message_text(job_title: str) -> str:
    """Chat line the business sends automatically when it approves."""
    return f"I approved your application for {job_title}."
