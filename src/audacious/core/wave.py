"""Two-channel sample store shared by sources, effects and the WAVE codec."""

from __future__ import annotations

from typing import Iterable, Optional, Union

import numpy as np

from .errors import IndexOutOfRangeError

Samples = Union[np.ndarray, Iterable[float]]


def as_samples(samples: Samples) -> np.ndarray:
    """Return a new one-dimensional float32 array holding ``samples``."""
    if isinstance(samples, Wave):
        raise TypeError("expected a sample sequence, got a Wave")
    if not isinstance(samples, np.ndarray):
        samples = list(samples)
    return np.array(samples, dtype=np.float32).reshape(-1)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _owned(array: np.ndarray) -> np.ndarray:
    array = np.asarray(array, dtype=np.float32)
    if array.base is not None:
        array = array.copy()
    return _frozen(array).reshape(-1)


_EMPTY = _frozen(np.zeros(0, dtype=np.float32))


class Wave:
    """Left and right float32 channels that may grow independently.

    Channel arrays are never written in place: every mutating method swaps in
    new arrays, and the arrays handed out by :attr:`left` and :attr:`right`
    are read-only. Two stores may therefore share an array without either
    one observing the other's edits.
    """

    __slots__ = ("_left", "_right")

    def __init__(
        self,
        left: Union["Wave", Samples, None] = None,
        right: Optional[Samples] = None,
    ) -> None:
        if isinstance(left, Wave):
            if right is not None:
                raise TypeError("cannot combine a Wave with a right channel")
            self._left, self._right = left._left, left._right
            return
        self._left = _EMPTY if left is None else _frozen(as_samples(left))
        if right is None:
            # A single sequence is mono: both channels hold the same samples.
            self._right = self._left if left is not None else _EMPTY
        else:
            self._right = _frozen(as_samples(right))

    @classmethod
    def adopt(cls, left: np.ndarray, right: np.ndarray) -> "Wave":
        """Take ownership of two float32 arrays without copying them.

        The arrays are marked read-only, so the caller can still read them but
        can no longer change the samples the store now owns. Views into a
        larger buffer, and arrays of another dtype, are copied instead: the
        buffer behind a view would stay writable. Passing the same array for
        both channels keeps them shared.
        """
        wave = cls.__new__(cls)
        wave._left = _owned(left)
        wave._right = wave._left if right is left else _owned(right)
        return wave

    # --- Channel access -------------------------------------------------
    @property
    def left(self) -> np.ndarray:
        return self._left

    @property
    def right(self) -> np.ndarray:
        return self._right

    def length(self) -> int:
        """Length of the longer channel."""
        return max(len(self._left), len(self._right))

    def __len__(self) -> int:
        return self.length()

    def padded(self, length: Optional[int] = None) -> tuple[np.ndarray, np.ndarray]:
        """Return both channels zero-padded to ``length`` without touching the store."""
        if length is None:
            length = self.length()
        return _pad(self._left, length), _pad(self._right, length)

    # --- Appending ------------------------------------------------------
    def append(self, left: Union["Wave", Samples], right: Optional[Samples] = None) -> None:
        """Append a mono sequence to both channels, one sequence per channel, or another Wave."""
        new_left, new_right = _split(left, right)
        self._left = _frozen(np.concatenate([self._left, new_left]))
        self._right = _frozen(np.concatenate([self._right, new_right]))

    def append_left(self, samples: Samples) -> None:
        self._left = _frozen(np.concatenate([self._left, as_samples(samples)]))

    def append_right(self, samples: Samples) -> None:
        self._right = _frozen(np.concatenate([self._right, as_samples(samples)]))

    def insert(
        self,
        index: int,
        left: Union["Wave", Samples],
        right: Optional[Samples] = None,
    ) -> None:
        """Insert samples before ``index`` in both channels.

        ``index`` may equal a channel's length (inserting at the end). Both
        channels are checked before either one changes.
        """
        self._check_insert(index, self._left, "left")
        self._check_insert(index, self._right, "right")
        new_left, new_right = _split(left, right)
        self._left = _frozen(
            np.concatenate([self._left[:index], new_left, self._left[index:]])
        )
        self._right = _frozen(
            np.concatenate([self._right[:index], new_right, self._right[index:]])
        )

    # --- Ranges ---------------------------------------------------------
    def slice(self, index: int, count: int) -> "Wave":
        """Return a new Wave holding ``count`` samples of each channel from ``index``."""
        self._check_range(index, count)
        stop = index + count
        return Wave.adopt(self._left[index:stop].copy(), self._right[index:stop].copy())

    def remove(self, index: int, count: int) -> None:
        """Delete ``count`` samples from each channel starting at ``index``."""
        self._check_range(index, count)
        stop = index + count
        self._left = _frozen(np.concatenate([self._left[:index], self._left[stop:]]))
        self._right = _frozen(np.concatenate([self._right[:index], self._right[stop:]]))

    def clear(self) -> None:
        self._left = _EMPTY
        self._right = _EMPTY

    def copy(self) -> "Wave":
        return Wave(self)

    # --- Operators ------------------------------------------------------
    def __add__(self, other: Union["Wave", Samples]) -> "Wave":
        result = self.copy()
        result.append(other)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wave):
            return NotImplemented
        return bool(
            np.array_equal(self._left, other._left) and np.array_equal(self._right, other._right)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Wave(left={len(self._left)} samples, right={len(self._right)} samples)"

    # --- Helpers --------------------------------------------------------
    @staticmethod
    def _check_insert(index: int, channel: np.ndarray, name: str) -> None:
        if not 0 <= index <= len(channel):
            raise IndexOutOfRangeError(
                f"insert index {index} outside [0, {len(channel)}] for {name} channel"
            )

    def _check_range(self, index: int, count: int) -> None:
        if index < 0 or count < 0:
            raise IndexOutOfRangeError(
                f"index and count must be non-negative, got {index} and {count}"
            )
        shortest = min(len(self._left), len(self._right))
        if index + count > shortest:
            raise IndexOutOfRangeError(
                f"range [{index}, {index + count}) exceeds channel length {shortest}"
            )


def _split(left: Union[Wave, Samples], right: Optional[Samples]) -> tuple[np.ndarray, np.ndarray]:
    if isinstance(left, Wave):
        if right is not None:
            raise TypeError("cannot combine a Wave with a right channel")
        return left.left, left.right
    new_left = as_samples(left)
    if right is None:
        return new_left, new_left
    return new_left, as_samples(right)


def _pad(channel: np.ndarray, length: int) -> np.ndarray:
    out = np.zeros(length, dtype=np.float32)
    count = min(length, len(channel))
    out[:count] = channel[:count]
    return out
