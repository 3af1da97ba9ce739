DEFAULT_BUFFER_CAPACITY = 4 * 1024


class BytesBuffer:
    """Growable byte buffer collecting a response body.

    The storage is allocated up front from a capacity hint and doubled when
    a chunk does not fit, so appending a whole body costs amortized O(1) per
    byte. The buffer belongs to a single transformation and is not thread-safe.

    Args:
        initial_capacity: Number of bytes to preallocate, usually the declared
            content length of the response.

    Raises:
        ValueError: If the initial capacity is negative.
    """

    def __init__(self, initial_capacity: int = DEFAULT_BUFFER_CAPACITY):
        if initial_capacity < 0:
            raise ValueError("The initial capacity can't be negative")
        self._bytes = bytearray(initial_capacity)
        self._length = 0

    @property
    def capacity(self) -> int:
        return len(self._bytes)

    def __len__(self) -> int:
        return self._length

    def _ensure_capacity(self, needed: int):
        if self.capacity >= needed:
            return
        grown = bytearray(max(self.capacity * 2, needed))
        grown[: self._length] = memoryview(self._bytes)[: self._length]
        self._bytes = grown

    def append(self, chunk: bytes | bytearray | memoryview):
        """Append a chunk after the bytes collected so far."""
        end = self._length + len(chunk)
        self._ensure_capacity(end)
        self._bytes[self._length : end] = chunk
        self._length = end

    async def write(self, chunk: bytes | bytearray | memoryview):
        """Stream writer interface, lets a payload write itself into the buffer."""
        self.append(chunk)

    def finalize(self) -> bytearray:
        """Return the collected bytes as a bytes-like `bytearray`.

        The storage is returned as is when it is exactly full, otherwise it is
        trimmed to the collected length. Nothing must be appended afterwards.
        """
        if self._length == self.capacity:
            return self._bytes
        return self._bytes[: self._length]
