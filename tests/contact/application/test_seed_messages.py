from contact.message.inbox import MessageInbox
from contact.utils.seed import MESSAGES, seed_contact


def test_seed_contact_loads_every_status(moderator):
    assert seed_contact() == len(MESSAGES)

    counts = MessageInbox().status_counts(caller=moderator)
    assert counts == {"new": 3, "read": 2, "replied": 1, "archived": 1}
