"""
Message Service - chat between the two participants of a collaboration
"""

from typing import List, Tuple

from sqlalchemy import select, func

from sponsorhub.core.exceptions import AuthorizationError, InvalidStateError
from sponsorhub.core.logging_config import logger
from sponsorhub.models.collaboration import Collaboration, CollaborationStatus
from sponsorhub.models.message import Message
from sponsorhub.models.user import User
from sponsorhub.schemas.message import MessageCreate
from sponsorhub.services.base import BaseService
from sponsorhub.services.collaboration_service import CollaborationService
from sponsorhub.utils.pagination import paginate


class MessageService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.collaborations = CollaborationService(db)

    async def list_messages(self, collaboration_id: str, user: User, page: int, limit: int) -> Tuple[List[Message], dict]:
        """Oldest first so clients can render the thread top-down"""
        collaboration = await self.collaborations.get_for_participant(collaboration_id, user)
        query = (
            select(Message)
            .where(Message.collaboration_id == collaboration.id)
            .order_by(Message.created_at.asc())
        )
        return await paginate(self.db, query, page, limit)

    async def unread_count(self, collaboration_id: str, user: User) -> int:
        """Unread messages sent by the other participant"""
        collaboration = await self.collaborations.get_for_participant(collaboration_id, user)
        count = await self.db.scalar(
            select(func.count(Message.id)).where(
                Message.collaboration_id == collaboration.id,
                Message.sender_id != str(user.id),
                Message.is_read.is_(False),
            )
        )
        return count or 0

    async def send(self, collaboration_id: str, user: User, data: MessageCreate) -> Message:
        collaboration: Collaboration = await self.collaborations.get_for_participant(collaboration_id, user)
        if collaboration.status == CollaborationStatus.TERMINATED:
            raise InvalidStateError("Cannot send messages in a terminated collaboration", collaboration.status.value)

        message = Message(
            collaboration_id=collaboration.id,
            sender_id=str(user.id),
            content=data.content,
            attachments=[attachment.model_dump() for attachment in data.attachments],
            is_read=False,
        )
        self.db.add(message)
        await self.db.commit()

        logger.debug(f"Message {message.id} sent in collaboration {collaboration.id}")
        return await self.reload(message)

    async def mark_read(self, message_id: str, user: User) -> Message:
        message = await self.get_or_404(Message, message_id, "Message")
        collaboration = await self.collaborations.get_collaboration(message.collaboration_id)
        if not collaboration.is_participant(user.id):
            raise AuthorizationError("You are not a participant in this collaboration")

        message.is_read = True
        await self.db.commit()
        return message
