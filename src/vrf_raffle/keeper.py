from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from .errors import UpkeepNotNeeded
from .raffle import Raffle

log = logging.getLogger(__name__)


class Keeper:
    """Polls a raffle and closes the round whenever it is eligible."""

    def __init__(self, raffle: Raffle) -> None:
        self.raffle = raffle

    def poll(self) -> Optional[int]:
        upkeep_needed, status = self.raffle.check_upkeep()
        if not upkeep_needed:
            log.debug("No upkeep needed: %s", status.as_dict())
            return None
        try:
            return self.raffle.perform_upkeep()
        except UpkeepNotNeeded as e:
            # Someone else closed the round between check and perform.
            log.warning("Upkeep raced: %s", e)
            return None

    def run(
        self,
        max_polls: int,
        poll_interval: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> List[int]:
        request_ids: List[int] = []
        for i in range(max_polls):
            request_id = self.poll()
            if request_id is not None:
                request_ids.append(request_id)
            if i + 1 < max_polls:
                sleep(poll_interval)
        return request_ids
