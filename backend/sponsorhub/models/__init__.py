from sponsorhub.models.user import User, UserRole
from sponsorhub.models.event import Event, EventStatus, EventMode
from sponsorhub.models.proposal import SponsorshipProposal, ProposalStatus, OPEN_PROPOSAL_STATUSES
from sponsorhub.models.sponsorship_request import SponsorshipRequest, RequestStatus, RequestInitiator
from sponsorhub.models.collaboration import Collaboration, CollaborationStatus
from sponsorhub.models.message import Message
from sponsorhub.models.document import Document, DocumentType
from sponsorhub.models.notification import Notification, NotificationType, RelatedEntityType
from sponsorhub.models.audit_log import AuditLog

__all__ = [
    "User",
    "UserRole",
    "Event",
    "EventStatus",
    "EventMode",
    "SponsorshipProposal",
    "ProposalStatus",
    "OPEN_PROPOSAL_STATUSES",
    "SponsorshipRequest",
    "RequestStatus",
    "RequestInitiator",
    "Collaboration",
    "CollaborationStatus",
    "Message",
    "Document",
    "DocumentType",
    "Notification",
    "NotificationType",
    "RelatedEntityType",
    "AuditLog",
]
