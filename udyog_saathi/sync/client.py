"""
Polling client for the Udyog Saathi API.

ApiClient is a thin async wrapper over httpx. FeedSync and ChatSync own
the latest state they fetched and refresh it through a SyncStream each.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import httpx

from udyog_saathi.core.config import get_settings
from udyog_saathi.core.logging import get_logger
from udyog_saathi.sync.streams import SyncStream

logger = get_logger(__name__)


class ApiClient:
    """Async JSON client for the /api routes the polling streams read."""

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.AsyncClient] = None,
                 timeout: float = 10.0):
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")
        self.http = http or httpx.AsyncClient(timeout=timeout)

    async def _get(self, path: str):
        response = await self.http.get(f"{self.base_url}{path}")
        response.raise_for_status()
        return response.json()

    async def jobs(self) -> List[dict]:
        return await self._get("/jobs")

    async def worker_profiles(self) -> List[dict]:
        return await self._get("/worker-profiles")

    async def instant_services(self) -> List[dict]:
        return await self._get("/instant-services")

    async def notifications(self, email: str) -> List[dict]:
        return await self._get(f"/notifications/{email}")

    async def user_activity(self, email: str) -> dict:
        return await self._get(f"/user-activity/{email}")

    async def chat(self, user_a: str, user_b: str) -> List[dict]:
        return await self._get(f"/chat/{user_a}/{user_b}")

    async def send_message(self, sender_email: str, receiver_email: str, text: str) -> dict:
        response = await self.http.post(
            f"{self.base_url}/send-message",
            json={"senderEmail": sender_email, "receiverEmail": receiver_email, "text": text}
        )
        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        await self.http.aclose()


@dataclass
class FeedState:
    jobs: List[dict] = field(default_factory=list)
    workers: List[dict] = field(default_factory=list)
    instant: List[dict] = field(default_factory=list)
    notifications: List[dict] = field(default_factory=list)
    activity: Dict[str, list] = field(default_factory=lambda: {"posts": [], "instant": []})


def approved_contacts(notifications: List[dict], email: str) -> List[dict]:
    """
    Chat partners unlocked for email: the other side of every approved
    application email takes part in, first occurrence wins.
    """
    contacts = []
    seen = set()
    for n in notifications:
        if n.get("status") != "approved":
            continue
        if n.get("businessEmail") == email:
            other = {"email": n.get("applicantEmail"), "name": n.get("applicantName"), "jobTitle": n.get("jobTitle")}
        elif n.get("applicantEmail") == email:
            other = {"email": n.get("businessEmail"), "name": None, "jobTitle": n.get("jobTitle")}
        else:
            continue
        if other["email"] and other["email"] not in seen:
            seen.add(other["email"])
            contacts.append(other)
    return contacts


class FeedSync:
    """
    Refreshes all primary feeds plus notifications for one user.

    is_visible is checked once before each refresh; when it returns False
    the tick does nothing. The four queries run concurrently and are
    assigned together, so the state may mix slightly different instants.
    """

    def __init__(
        self,
        api: ApiClient,
        email: str,
        is_visible: Callable[[], bool] = lambda: True,
        profile_view: Callable[[], bool] = lambda: False,
        interval: Optional[float] = None,
    ):
        self.api = api
        self.email = email
        self.is_visible = is_visible
        self.profile_view = profile_view
        self.state = FeedState()
        self.stream = SyncStream("feed-sync", interval or get_settings().feed_sync_interval, self.refresh)

    async def refresh(self) -> None:
        if not self.is_visible():
            return
        jobs, workers, instant, notifications = await asyncio.gather(
            self.api.jobs(),
            self.api.worker_profiles(),
            self.api.instant_services(),
            self.api.notifications(self.email),
        )
        self.state.jobs = jobs
        self.state.workers = workers
        self.state.instant = instant
        self.state.notifications = notifications

        if self.profile_view():
            try:
                self.state.activity = await self.api.user_activity(self.email)
            except httpx.HTTPError as e:
                logger.error("Profile sync error: %s", e)

    @property
    def chat_contacts(self) -> List[dict]:
        return approved_contacts(self.state.notifications, self.email)

    def start(self) -> None:
        self.stream.start()

    async def stop(self) -> None:
        await self.stream.stop()


class ChatSync:
    """Keeps the open chat thread's history fresh; idle when no chat is open."""

    def __init__(self, api: ApiClient, email: str, interval: Optional[float] = None):
        self.api = api
        self.email = email
        self.interval = interval or get_settings().chat_sync_interval
        self.partner: Optional[str] = None
        self.history: List[dict] = []
        self.stream: Optional[SyncStream] = None

    async def refresh(self) -> None:
        partner = self.partner
        if partner is None:
            return
        history = await self.api.chat(self.email, partner)
        # Discard a result for a thread that was switched or closed meanwhile
        if partner == self.partner:
            self.history = history

    async def open_chat(self, partner_email: str) -> None:
        await self.close_chat()
        self.partner = partner_email
        self.stream = SyncStream(f"chat-sync:{partner_email}", self.interval, self.refresh)
        self.stream.start()

    async def close_chat(self) -> None:
        if self.stream is not None:
            await self.stream.stop()
        self.stream = None
        self.partner = None
        self.history = []

    async def send(self, text: str) -> None:
        if self.partner is None or not text:
            return
        await self.api.send_message(self.email, self.partner, text)
