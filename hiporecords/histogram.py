"""Lightweight one-dimensional histograms."""

from __future__ import annotations

import bisect
from collections.abc import Sequence


class Axis:
    """A uniformly binned axis."""

    def __init__(self, nbins: int, low: float, high: float) -> None:
        if nbins <= 0:
            raise ValueError("an axis needs at least one bin")
        step = (high - low) / nbins
        self.edges = [low + i * step for i in range(nbins + 1)]

    def find(self, value: float) -> int:
        """Return the bin index for *value*; -1 below the axis, nbins or more above it."""
        return bisect.bisect_left(self.edges, value) - 1

    def nbins(self) -> int:
        return len(self.edges) - 1

    def center(self, bin_index: int) -> float:
        left = self.edges[bin_index]
        return left + 0.5 * (self.edges[bin_index + 1] - left)

    def low(self) -> float:
        return self.edges[0]

    def high(self) -> float:
        return self.edges[-1]


class H1D:
    """A 1D histogram with underflow and overflow slots."""

    def __init__(self, nbins: int, low: float, high: float, hid: int = 0) -> None:
        self.hid = hid
        self.axis = Axis(nbins, low, high)
        self._slots = [0.0] * (nbins + 2)

    @property
    def underflow(self) -> float:
        return self._slots[0]

    @property
    def overflow(self) -> float:
        return self._slots[-1]

    def fill(self, value: float) -> None:
        """Add one entry at *value*."""
        bin_index = self.axis.find(value)
        if bin_index < 0:
            self._slots[0] += 1.0
        elif bin_index >= self.axis.nbins():
            self._slots[-1] += 1.0
        else:
            self._slots[bin_index + 1] += 1.0

    def content(self, bin_index: int) -> float:
        """Content of bin *bin_index* (0-based, excluding underflow)."""
        return self._slots[bin_index + 1]

    def set_content(self, bin_index: int, value: float) -> None:
        """Set a raw storage slot: 0 is underflow, nbins + 1 is overflow."""
        self._slots[bin_index] = value

    def series(self) -> list[float]:
        """Contents of the regular bins, without underflow and overflow."""
        return self._slots[1:-1]

    def show(self) -> None:
        """Print bin centres and contents."""
        for bin_index in range(self.axis.nbins()):
            print(f"{self.axis.center(bin_index):12.5f} {self.content(bin_index):12.5f}")

    @staticmethod
    def accumulate(histograms: Sequence[H1D]) -> H1D:
        """Sum the bin contents of *histograms* into a new histogram."""
        if not histograms:
            raise ValueError("nothing to accumulate")
        first = histograms[0]
        axis = first.axis
        total = H1D(axis.nbins(), axis.low(), axis.high(), first.hid)
        for bin_index in range(axis.nbins()):
            total.set_content(bin_index, sum(h.content(bin_index) for h in histograms))
        return total

    @staticmethod
    def declare(count: int, nbins: int, low: float, high: float) -> list[H1D]:
        """Create *count* identical histograms with ids starting at 100."""
        return [H1D(nbins, low, high, 100 + j) for j in range(count)]