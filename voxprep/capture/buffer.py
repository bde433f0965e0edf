"""CaptureBuffer — lock-protected growable sample buffer.

Shared between the audio driver thread (append) and the capture session
(clear on stop). The lock is held only while appending and cutting batches;
batches handed out are copies owned by the caller, so processing never
happens under the lock.
"""

from __future__ import annotations

import threading

import numpy as np


class CaptureBuffer:
    """Accumulates captured samples and cuts them into fixed-size batches.

    Args:
        batch_size: Samples per batch (the session uses ``sample_rate``,
            i.e. about one second of audio).
    """

    __slots__ = ("_batch_size", "_chunks", "_lock", "_pending")

    def __init__(self, batch_size: int) -> None:
        if batch_size <= 0:
            msg = f"batch_size must be positive, got {batch_size}"
            raise ValueError(msg)
        self._batch_size = batch_size
        self._chunks: list[np.ndarray] = []
        self._pending = 0
        self._lock = threading.Lock()

    @property
    def batch_size(self) -> int:
        """Samples per batch."""
        return self._batch_size

    @property
    def pending(self) -> int:
        """Buffered samples not yet handed out as a batch."""
        with self._lock:
            return self._pending

    def append(self, samples: np.ndarray) -> list[np.ndarray]:
        """Append samples and return every complete batch now available.

        Exactly ``batch_size`` samples are drained per batch; the remainder
        stays buffered for the next call.

        Args:
            samples: Float32 samples (flattened, interleaved).

        Returns:
            Zero or more batches, each a new array of ``batch_size`` samples.
        """
        chunk = np.array(samples, dtype=np.float32).reshape(-1)
        if len(chunk) == 0:
            return []

        with self._lock:
            self._chunks.append(chunk)
            self._pending += len(chunk)
            if self._pending < self._batch_size:
                return []

            data = np.concatenate(self._chunks)
            n_batches = len(data) // self._batch_size
            cut = n_batches * self._batch_size
            batches = [
                data[i : i + self._batch_size].copy() for i in range(0, cut, self._batch_size)
            ]
            remainder = data[cut:]
            self._chunks = [remainder] if len(remainder) else []
            self._pending = len(remainder)

        return batches

    def clear(self) -> int:
        """Drop buffered samples.

        Returns:
            Number of samples discarded.
        """
        with self._lock:
            discarded = self._pending
            self._chunks = []
            self._pending = 0
        return discarded
