"""Message inbox — public submission and moderator triage."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from contact.message.management import DeleteMessage, SubmitMessage, UpdateMessage
from contact.message.message import Message, MessageStatus
from contact.utils.logging import get_logger
from shared.auth import ANONYMOUS, is_moderator
from shared.errors import ForbiddenError

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


class MessageInbox:
    def __init__(self, is_moderator=is_moderator):
        self._is_moderator = is_moderator

    def submit(self, name, email, subject, body, phone=None, priority=None):
        message_id = current_domain.process(
            SubmitMessage(
                name=name,
                email=email,
                phone=phone,
                subject=subject,
                body=body,
                priority=priority,
            ),
            asynchronous=False,
        )
        logger.info("Contact message submitted", message_id=message_id)
        return self._repo().get(message_id)

    def get(self, message_id, caller=ANONYMOUS):
        """Fetch a message. Opening a new message marks it read."""
        self._assert_moderator(caller)
        message = self._repo().get(message_id)
        if message.status == MessageStatus.NEW.value:
            return self.update(message_id, caller=caller, status=MessageStatus.READ.value)
        return message

    def update(self, message_id, caller=ANONYMOUS, status=None, priority=None, notes=None):
        self._assert_moderator(caller)
        current_domain.process(
            UpdateMessage(message_id=message_id, status=status, priority=priority, notes=notes),
            asynchronous=False,
        )
        logger.info("Contact message updated", message_id=str(message_id), status=status, priority=priority)
        return self._repo().get(message_id)

    def mark_read(self, message_id, caller=ANONYMOUS):
        return self.update(message_id, caller=caller, status=MessageStatus.READ.value)

    def mark_replied(self, message_id, caller=ANONYMOUS, notes=None):
        return self.update(message_id, caller=caller, status=MessageStatus.REPLIED.value, notes=notes)

    def archive(self, message_id, caller=ANONYMOUS):
        return self.update(message_id, caller=caller, status=MessageStatus.ARCHIVED.value)

    def delete(self, message_id, caller=ANONYMOUS):
        self._assert_moderator(caller)
        current_domain.process(DeleteMessage(message_id=message_id), asynchronous=False)
        logger.info("Contact message deleted", message_id=str(message_id))

    def list(self, caller=ANONYMOUS, status=None, priority=None, page=1, limit=20):
        """Newest messages first. Returns ``(messages, total)``."""
        self._assert_moderator(caller)

        errors = {}
        if page < 1:
            errors["page"] = ["Page must be at least 1"]
        if limit < 1 or limit > MAX_PAGE_SIZE:
            errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
        if errors:
            raise ValidationError(errors)

        filters = {}
        if status:
            filters["status"] = status
        if priority:
            filters["priority"] = priority

        query = self._repo()._dao.query
        if filters:
            query = query.filter(**filters)
        result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return result.items, result.total

    def status_counts(self, caller=ANONYMOUS):
        """Number of messages in each status."""
        self._assert_moderator(caller)
        dao = self._repo()._dao
        return {status.value: dao.query.filter(status=status.value).all().total for status in MessageStatus}

    def _repo(self):
        return current_domain.repository_for(Message)

    def _assert_moderator(self, caller):
        if not self._is_moderator(caller):
            raise ForbiddenError({"_entity": ["Moderator access required"]})
