from sponsorhub.services.notification_service import NotificationService, notification_cleanup
from sponsorhub.services.event_service import EventService
from sponsorhub.services.proposal_service import ProposalService
from sponsorhub.services.collaboration_service import CollaborationService
from sponsorhub.services.message_service import MessageService
from sponsorhub.services.document_service import DocumentService
from sponsorhub.services.sponsorship_service import SponsorshipService
from sponsorhub.services.analytics_service import AnalyticsService

__all__ = [
    "NotificationService",
    "notification_cleanup",
    "EventService",
    "ProposalService",
    "CollaborationService",
    "MessageService",
    "DocumentService",
    "SponsorshipService",
    "AnalyticsService",
]
