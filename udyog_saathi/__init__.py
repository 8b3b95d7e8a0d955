"""
Udyog Saathi
A social marketplace connecting informal-sector workers and businesses.

Architecture:
- MongoDB: Accounts, listings, applications and chat messages
- FastAPI: Stateless JSON API under /api
- Polling client: Fixed-interval feed and chat synchronization
"""

__version__ = "1.0.0"
