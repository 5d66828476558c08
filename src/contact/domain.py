"""Contact bounded context — storefront contact form messages.

Visitors submit messages; moderators triage them by status and priority.
Logging is configured once by the catalogue context's logging setup.
"""

from protean.domain import Domain

from contact.utils.logging import get_logger

contact = Domain(name="contact")

logger = get_logger(__name__)
