"""Breaking-news aging.

Articles are published breaking and lose the flag here, once per
orchestrator run. There is no independent timer: if no run happens, stale
articles stay breaking until the next one.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from article_store.repository import demote_breaking_before
from common.datetime import utc_now

logger = logging.getLogger(__name__)


def demote_stale_breaking(
    session: Session,
    window_minutes: int,
    now: datetime | None = None,
) -> int:
    """Clear the breaking flag on articles older than the aging window."""
    cutoff = (now or utc_now()) - timedelta(minutes=window_minutes)
    demoted = demote_breaking_before(session, cutoff)
    if demoted:
        logger.info("Demoted %d breaking article(s) published before %s", demoted, cutoff.isoformat())
    return demoted
