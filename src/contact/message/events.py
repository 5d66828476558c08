"""Domain events for the Message aggregate."""

from protean.fields import DateTime, Identifier, String

from contact.domain import contact


@contact.event(part_of="Message")
class MessageSubmitted:
    """A visitor sent a message through the contact form."""

    __version__ = 1

    message_id = Identifier(required=True)
    email = String(required=True)
    subject = String(required=True)
    priority = String(required=True)
    submitted_at = DateTime(required=True)


@contact.event(part_of="Message")
class MessageStatusChanged:
    __version__ = 1

    message_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
