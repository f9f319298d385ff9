"""Time stamps with 32-bit seconds and nanoseconds."""

from __future__ import annotations

import functools
import math

_NSEC_PER_SEC = 1_000_000_000
_UINT32_MAX = 2**32 - 1


@functools.total_ordering
class Time:
    """An absolute time stamp held as whole seconds plus nanoseconds.

    Both fields must fit the unsigned 32-bit range. Nanoseconds at or
    beyond one second are carried into the seconds field.
    """

    __slots__ = ("_sec", "_nsec")

    def __init__(self, sec: int = 0, nsec: int = 0) -> None:
        sec = int(sec)
        nsec = int(nsec)
        if sec < 0 or nsec < 0:
            raise ValueError("time fields must not be negative")
        carry, nsec = divmod(nsec, _NSEC_PER_SEC)
        if sec + carry > _UINT32_MAX:
            raise OverflowError("Time is out of dual 32-bit range")
        self._sec = sec + carry
        self._nsec = nsec

    @property
    def sec(self) -> int:
        return self._sec

    @property
    def nsec(self) -> int:
        return self._nsec

    @classmethod
    def from_sec(cls, t: float) -> "Time":
        """Build a time stamp from a number of seconds."""
        sec = math.floor(t)
        if sec < 0 or sec > _UINT32_MAX:
            raise OverflowError("Time is out of dual 32-bit range")
        # Round half away from zero; the fractional part is never negative.
        nsec = math.floor((t - sec) * 1e9 + 0.5)
        return cls(sec, nsec)

    def to_sec(self) -> float:
        return float(self._sec) + 1e-9 * float(self._nsec)

    def to_nsec(self) -> int:
        return self._sec * _NSEC_PER_SEC + self._nsec

    def __add__(self, other: object) -> "Time":
        if not isinstance(other, Time):
            return NotImplemented
        sec_sum = self._sec + other._sec
        nsec_sum = self._nsec + other._nsec
        carry, nsec_sum = divmod(nsec_sum, _NSEC_PER_SEC)
        sec_sum += carry
        if sec_sum > _UINT32_MAX:
            raise OverflowError("Time is out of dual 32-bit range")
        return Time(sec_sum, nsec_sum)

    def __sub__(self, other: object) -> "Time":
        if not isinstance(other, Time):
            return NotImplemented
        if self < other:
            raise ValueError(f"Cannot subtract a bigger time value: {self} - {other}")
        secs = self._sec - other._sec
        if self._nsec < other._nsec:
            secs -= 1
            nsecs = self._nsec + _NSEC_PER_SEC - other._nsec
        else:
            nsecs = self._nsec - other._nsec
        return Time(secs, nsecs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._sec == other._sec and self._nsec == other._nsec

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return (self._sec, self._nsec) < (other._sec, other._nsec)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return (self._sec, self._nsec) <= (other._sec, other._nsec)

    def __hash__(self) -> int:
        return hash((self._sec, self._nsec))

    def __str__(self) -> str:
        return f"{self._sec} {self._nsec}"

    def __repr__(self) -> str:
        return f"Time(sec={self._sec}, nsec={self._nsec})"