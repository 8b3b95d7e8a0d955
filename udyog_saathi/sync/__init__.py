"""
Polling synchronization client.

Two independent periodic streams run on one event loop:
- FeedSync: jobs, workers, instant services and notifications (20s)
- ChatSync: history of the open chat thread (3s, only while a chat is open)

A tick that fires while the previous one is still running is dropped.
"""
from udyog_saathi.sync.streams import SyncStream
from udyog_saathi.sync.client import ApiClient, ChatSync, FeedState, FeedSync, approved_contacts

__all__ = [
    "SyncStream",
    "ApiClient",
    "ChatSync",
    "FeedState",
    "FeedSync",
    "approved_contacts",
]
