from . import (
    auth,
    profiles,
    events,
    proposals,
    sponsorship,
    collaborations,
    messages,
    documents,
    notifications,
)

__all__ = [
    "auth",
    "profiles",
    "events",
    "proposals",
    "sponsorship",
    "collaborations",
    "messages",
    "documents",
    "notifications",
]
