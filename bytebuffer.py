from typing import Union

from errors import TypeMismatchError


class ByteBuffer:
    """Fixed-length contiguous byte storage shared by word views.

    The length never changes after creation. Several views may hold the same
    buffer; writes through one are visible through all of them. There is no
    locking, callers that mutate from several threads must serialize access
    themselves.

    :ivar data: Underlying writable byte storage.
    :type data: bytearray | memoryview
    """

    def __init__(self, data: Union[bytearray, memoryview]):
        """Hold ``data`` without copying it.

        Prefer :meth:`allocate` or :meth:`wrap` over calling this directly.

        :param data: Writable byte storage.
        :type data: bytearray | memoryview
        :returns: None
        :rtype: None
        """
        self.data = data

    @classmethod
    def allocate(cls, byte_length: int) -> "ByteBuffer":
        """Create a new zero-filled buffer.

        :param byte_length: Number of bytes to allocate.
        :type byte_length: int
        :returns: Freshly allocated buffer.
        :rtype: ByteBuffer
        """
        return cls(bytearray(byte_length))

    @classmethod
    def wrap(cls, existing) -> "ByteBuffer":
        """Wrap existing writable storage without copying it.

        :param existing: A ``ByteBuffer`` (returned unchanged), a
            ``bytearray`` or a writable ``memoryview``.
        :returns: Buffer sharing memory with ``existing``.
        :rtype: ByteBuffer
        :raises TypeMismatchError: If ``existing`` is read-only or not
            byte storage at all.
        """
        if isinstance(existing, ByteBuffer):
            return existing
        if isinstance(existing, bytearray):
            return cls(existing)
        if isinstance(existing, memoryview):
            if existing.readonly:
                raise TypeMismatchError("Cannot wrap a read-only memoryview")
            if existing.format != "B" or existing.ndim != 1:
                existing = existing.cast("B")
            return cls(existing)
        raise TypeMismatchError(
            f"Cannot wrap {type(existing).__name__} as a byte buffer"
        )

    def byte_length(self) -> int:
        """Return the number of bytes held.

        :returns: Buffer size in bytes.
        :rtype: int
        """
        return len(self.data)

    @property
    def bit_length(self) -> int:
        return len(self.data) * 8

    def __len__(self):
        return len(self.data)

    def __getitem__(self, index: int) -> int:
        return self.data[index]

    def __setitem__(self, index: int, value: int):
        self.data[index] = value & 0xFF

    def __bytes__(self):
        return bytes(self.data)

    def hex(self) -> str:
        return bytes(self.data).hex()

    def __repr__(self):
        return f"ByteBuffer({self.hex()!r})"
