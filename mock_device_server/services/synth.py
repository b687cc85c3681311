"""
Mock Device Server - Synthetic Value Source
===========================================

What:  Random numbers, money amounts and timestamps for response generators.
How:   Wraps a ``random.Random`` and a clock callable. Nothing here is
       cryptographic; values are uniform over ``[0, upper)``.
Who:   Injected into every service. Tests pass a seeded Random and a fixed
       clock to pin the output.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional


def iso_timestamp(moment: datetime) -> str:
    """
    Render ``moment`` the way browsers do ``Date.toISOString()``.

    UTC, millisecond precision, ``Z`` suffix: ``2026-10-19T08:00:00.123Z``.
    """
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Synthesizer:
    """
    Source of every non-echoed value in a response.

    Methods mirror the three randomization rules of the device fleet:
        integer(upper)  → bounded random int (document numbers, counters)
        money(cents)    → random int / 100, a two-decimal amount
        digits(upper)   → random int rendered as a string (signs, RRN)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.rng = rng or random.Random()
        self.clock = clock

    # ── Random values ─────────────────────────────────────────────────────

    def integer(self, upper: int) -> int:
        return self.rng.randrange(upper)

    def money(self, upper_cents: int) -> float:
        return self.rng.randrange(upper_cents) / 100

    def digits(self, upper: int) -> str:
        return str(self.rng.randrange(upper))

    # ── Time ──────────────────────────────────────────────────────────────

    def now(self) -> datetime:
        return self.clock()

    def timestamp(self, delta: timedelta = timedelta(0)) -> str:
        """Current UTC time (shifted by ``delta``) as an ISO-8601 string."""
        return iso_timestamp(self.now() + delta)

    def local_timestamp(self, utc_offset_hours: int) -> str:
        """
        Current time at a fixed UTC offset, ISO-8601 with the offset suffix.

        Example for +3: ``2026-10-19T11:00:00.123+03:00``.
        """
        zone = timezone(timedelta(hours=utc_offset_hours))
        local = self.now().astimezone(zone)
        return local.isoformat(timespec="milliseconds")

    def local_display(self) -> str:
        """Human-readable local date/time for printed slips (``19.10.2026, 11:00:00``)."""
        return self.now().astimezone().strftime("%d.%m.%Y, %H:%M:%S")

    def epoch_millis(self) -> int:
        return int(self.now().timestamp() * 1000)


synthesizer = Synthesizer()
