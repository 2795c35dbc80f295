"""
Copy-on-write backing buffer for Matrix.

A Storage owns one C-contiguous float64 array of shape (rows, columns).
Several Matrix values may reference the same Storage after a logical
copy; the first one to write detaches onto a private duplicate. Owner
counts only ever over-estimate sharing (a dropped Matrix never releases
its claim), so the worst case is one unnecessary copy, never aliasing.

Not safe for concurrent writers on logically copied siblings.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class Storage:
    """Shared float64 buffer with an owner count."""

    __slots__ = ('_data', '_owners')

    def __init__(self, data: NDArray[np.float64]):
        self._data = data
        self._owners = 1

    @property
    def data(self) -> NDArray[np.float64]:
        return self._data

    @property
    def is_shared(self) -> bool:
        return self._owners > 1

    def share(self) -> Storage:
        """Register one more owner and return self."""
        self._owners += 1
        return self

    def detach(self) -> Storage:
        """
        Return a Storage the caller may write to.

        If this buffer is shared, give up one claim on it and return a
        private duplicate; otherwise return self.
        """
        if self._owners == 1:
            return self
        self._owners -= 1
        return Storage(self._data.copy(order='C'))
