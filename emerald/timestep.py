"""Frame time deltas."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Timestep:
    """Time elapsed between two frames, in seconds.

    Behaves like a number in arithmetic, so it can scale speeds directly.
    """

    time: float = 0.0

    @property
    def seconds(self) -> float:
        return self.time

    @property
    def milliseconds(self) -> float:
        return self.time * 1000.0

    def __float__(self) -> float:
        return float(self.time)

    def __add__(self, other: float) -> float:
        return self.time + float(other)

    def __radd__(self, other: float) -> float:
        return float(other) + self.time

    def __sub__(self, other: float) -> float:
        return self.time - float(other)

    def __rsub__(self, other: float) -> float:
        return float(other) - self.time

    def __mul__(self, other: float) -> float:
        return self.time * float(other)

    def __rmul__(self, other: float) -> float:
        return float(other) * self.time

    def __truediv__(self, other: float) -> float:
        return self.time / float(other)

    def __rtruediv__(self, other: float) -> float:
        return float(other) / self.time

    def __neg__(self) -> float:
        return -self.time