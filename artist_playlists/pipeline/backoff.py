"""Delay policies applied between sequential upstream calls.

Spotify enforces a sliding-window rate limit over the whole token and gives no
visibility into its bucket. Loops that issue many calls in a row (album track
listings, playlist batch appends) therefore pause between calls, and pause
longer after a failed call. The loops only see the BackoffPolicy interface so
the delays can be tuned or swapped without touching them.
"""

import time
from typing import Callable

from artist_playlists.config import ALBUM_ERROR_DELAY, ALBUM_FETCH_DELAY, BATCH_DELAY

Sleeper = Callable[[float], None]


class BackoffPolicy:
    """Base policy: decide how long to wait after a call, then wait."""

    def __init__(self, sleep: Sleeper = time.sleep) -> None:
        self._sleep = sleep

    def delay_for(self, failed: bool) -> float:
        raise NotImplementedError

    def wait(self, failed: bool = False) -> float:
        delay = self.delay_for(failed)
        if delay > 0:
            self._sleep(delay)
        return delay


class FixedBackoff(BackoffPolicy):
    def __init__(self, delay: float, sleep: Sleeper = time.sleep) -> None:
        super().__init__(sleep)
        self.delay = delay

    def delay_for(self, failed: bool) -> float:
        return self.delay


class PenaltyBackoff(BackoffPolicy):
    """Fixed delay after a success, a larger penalty delay after a failure."""

    def __init__(
        self, delay: float, penalty_delay: float, sleep: Sleeper = time.sleep
    ) -> None:
        super().__init__(sleep)
        self.delay = delay
        self.penalty_delay = penalty_delay

    def delay_for(self, failed: bool) -> float:
        return self.penalty_delay if failed else self.delay


def album_backoff(sleep: Sleeper = time.sleep) -> PenaltyBackoff:
    return PenaltyBackoff(ALBUM_FETCH_DELAY, ALBUM_ERROR_DELAY, sleep=sleep)


def batch_backoff(sleep: Sleeper = time.sleep) -> FixedBackoff:
    return FixedBackoff(BATCH_DELAY, sleep=sleep)
