"""Sample contact messages for local development and demos."""

from protean.utils.globals import current_domain

from contact.message.message import Message
from contact.utils.logging import get_logger

logger = get_logger(__name__)

MESSAGES = [
    {
        "name": "John Doe",
        "email": "john.doe@email.com",
        "subject": "Question about RoboClean Pro X1",
        "body": "Does the RoboClean Pro X1 work well on hardwood floors? What is the warranty period?",
        "status": "new",
        "priority": "normal",
    },
    {
        "name": "Alice Cooper",
        "email": "alice.cooper@email.com",
        "subject": "Bulk order inquiry",
        "body": "We would like 10 ServeBot Elite units for our hotel chain. Can you quote bulk pricing?",
        "status": "new",
        "priority": "high",
    },
    {
        "name": "Bob Martin",
        "email": "bob.martin@email.com",
        "subject": "Shipping to Canada",
        "body": "Do you ship to Canada? I'm interested in the ChefBot Deluxe.",
        "status": "read",
        "priority": "normal",
    },
    {
        "name": "Carol White",
        "email": "carol.white@email.com",
        "subject": "Product comparison",
        "body": "Which would you recommend for a 2-bedroom apartment, RoboClean Pro X1 or RoboClean Mini?",
        "status": "replied",
        "priority": "normal",
        "notes": "Recommended RoboClean Mini for apartment size. Sent comparison chart.",
    },
    {
        "name": "Daniel Lee",
        "email": "daniel.lee@email.com",
        "subject": "Technical support needed",
        "body": "My LawnMaster AI is not connecting to WiFi. I've tried resetting it multiple times.",
        "status": "new",
        "priority": "high",
    },
    {
        "name": "Emma Davis",
        "email": "emma.davis@email.com",
        "subject": "Partnership opportunity",
        "body": "I represent a retail chain and would like to discuss carrying your products.",
        "status": "read",
        "priority": "high",
    },
    {
        "name": "Frank Miller",
        "email": "frank.miller@email.com",
        "subject": "Great products!",
        "body": "Just wanted to say I love my RoboClean Pro X1. Best purchase this year!",
        "status": "archived",
        "priority": "low",
    },
]


def seed_contact():
    """Load sample messages into the current domain. Returns the number created."""
    repo = current_domain.repository_for(Message)

    for data in MESSAGES:
        data = dict(data)
        status = data.pop("status")
        notes = data.pop("notes", None)

        message = Message.submit(**data)
        message.change_status(status)
        message.triage(notes=notes)
        repo.add(message)

    logger.info("Contact messages seeded", messages=len(MESSAGES))
    return len(MESSAGES)
