"""
Clock and id generation, injected into the services so tests can pin them.
"""

import uuid
from datetime import date
from typing import Callable

Clock = Callable[[], date]
IdFactory = Callable[[str], str]


def system_today() -> date:
    return date.today()


def random_id(prefix: str) -> str:
    """Ids look like 'app-3f9c2a1b' or 'opp-0d4e77aa'."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


# How many fresh ids a service draws before giving up on a collision
MAX_ID_ATTEMPTS = 5
