from typing import Optional


def bit_mask(nbits: int) -> int:
    """Return an integer with the lowest ``nbits`` bits set.

    :param nbits: Number of bits in the mask.
    :type nbits: int
    :returns: ``2**nbits - 1``.
    :rtype: int
    """
    return (1 << nbits) - 1


def get_bits(data, pos: int, nbits: int) -> Optional[int]:
    """Read ``nbits`` bits starting at absolute bit position ``pos``.

    Bits are numbered MSB first: bit 0 is the most significant bit of
    ``data[0]``. The value is accumulated MSB first, one byte at a time, so
    spans may straddle any number of byte boundaries.

    A span that only partly overlaps the storage is still read: the bits
    falling before the first byte or after the last byte count as zeros.

    :param data: Byte storage to read from.
    :type data: bytearray | memoryview | bytes
    :param pos: Bit position of the span's most significant bit. May be
        negative.
    :type pos: int
    :param nbits: Width of the span in bits.
    :type nbits: int
    :returns: The unsigned value of the span, or ``None`` if the span lies
        wholly outside the storage.
    :rtype: Optional[int]
    """
    total = len(data) * 8
    end = pos + nbits
    if end <= 0 or pos >= total:
        return None

    value = 0
    cursor = max(pos, 0)
    stop = min(end, total)
    while cursor < stop:
        bit_in_byte = cursor & 7
        read = min(stop - cursor, 8 - bit_in_byte)
        bits = (data[cursor >> 3] >> (8 - read - bit_in_byte)) & bit_mask(read)
        value = (value << read) | bits
        cursor += read

    # bits past the end of storage are the low bits of the word
    return value << (end - stop)


def set_bits(data, pos: int, nbits: int, value: int) -> None:
    """Write the lowest ``nbits`` of ``value`` at absolute bit position ``pos``.

    Higher bits of ``value`` are dropped. Only the part of the span inside the
    storage is written, the rest is discarded, so a span wholly outside the
    storage is a no-op. For each touched byte only the bits belonging to the
    span are replaced.

    :param data: Writable byte storage.
    :type data: bytearray | memoryview
    :param pos: Bit position of the span's most significant bit. May be
        negative.
    :type pos: int
    :param nbits: Width of the span in bits.
    :type nbits: int
    :param value: Value to store.
    :type value: int
    :returns: None
    :rtype: None
    """
    total = len(data) * 8
    end = pos + nbits
    if end <= 0 or pos >= total:
        return

    value &= bit_mask(nbits)
    cursor = max(pos, 0)
    stop = min(end, total)
    while cursor < stop:
        bit_in_byte = cursor & 7
        byte_index = cursor >> 3
        wrote = min(stop - cursor, 8 - bit_in_byte)
        mask = bit_mask(wrote)
        write_bits = (value >> (end - cursor - wrote)) & mask
        dest_shift = 8 - bit_in_byte - wrote
        dest_mask = ~(mask << dest_shift) & 0xFF
        data[byte_index] = (data[byte_index] & dest_mask) | (
            write_bits << dest_shift
        )
        cursor += wrote
