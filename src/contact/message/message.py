"""Message aggregate — a contact form submission.

Statuses (new, read, replied, archived) are triage labels set by moderators,
so any status may follow any other. ``replied_at`` and ``archived_at``
record the first time a message reached those states and are never
overwritten.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from contact.domain import contact
from contact.message.events import MessageStatusChanged, MessageSubmitted
from shared.email import is_valid_email, normalize_email


class MessageStatus(Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class MessagePriority(Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


@contact.aggregate
class Message:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(max_length=30)
    subject = String(required=True, max_length=200)
    body = String(required=True, max_length=2000)

    status = String(choices=MessageStatus, default=MessageStatus.NEW.value)
    priority = String(choices=MessagePriority, default=MessagePriority.NORMAL.value)
    notes = String(max_length=1000)

    replied_at = DateTime()
    archived_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def email_must_be_valid(self):
        if self.email is not None and not is_valid_email(self.email):
            raise ValidationError({"email": ["Please provide a valid email"]})

    @classmethod
    def submit(cls, name, email, subject, body, phone=None, priority=None):
        now = datetime.now(UTC)

        message = cls(
            name=name.strip() if name else name,
            email=normalize_email(email),
            phone=phone.strip() if phone else None,
            subject=subject.strip() if subject else subject,
            body=body,
            status=MessageStatus.NEW.value,
            priority=priority or MessagePriority.NORMAL.value,
            created_at=now,
            updated_at=now,
        )

        message.raise_(
            MessageSubmitted(
                message_id=str(message.id),
                email=message.email,
                subject=message.subject,
                priority=message.priority,
                submitted_at=now,
            )
        )

        return message

    def change_status(self, status):
        """Move to ``status``, stamping ``replied_at``/``archived_at`` on first arrival."""
        try:
            target = MessageStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown message status '{status}'"]}) from None

        if target.value == self.status:
            return

        now = datetime.now(UTC)
        previous = self.status
        self.status = target.value
        if target == MessageStatus.REPLIED and self.replied_at is None:
            self.replied_at = now
        if target == MessageStatus.ARCHIVED and self.archived_at is None:
            self.archived_at = now
        self.updated_at = now

        self.raise_(
            MessageStatusChanged(
                message_id=str(self.id),
                previous_status=previous,
                new_status=self.status,
                changed_at=now,
            )
        )

    def triage(self, priority=None, notes=None):
        if priority is not None:
            self.priority = priority
        if notes is not None:
            self.notes = notes
        self.updated_at = datetime.now(UTC)
