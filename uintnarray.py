import enum
import math
import numbers
from collections.abc import Iterable
from typing import Iterator, List, Optional, Tuple

from bitops import bit_mask, get_bits, set_bits
from bytebuffer import ByteBuffer
from errors import BoundsError, ConfigurationError, TypeMismatchError

MIN_BIT_WIDTH = 1  #: Narrowest supported word
MAX_BIT_WIDTH = 32  #: Widest supported word
MAX_LENGTH = 2 ** 32  #: Largest word count accepted as a length argument

_BUFFER_TYPES = (ByteBuffer, bytearray, memoryview)


class Alignment(enum.Enum):
    """Physical packing discipline of a view."""

    #: Words start at the buffer's first bit, slack is trailing padding.
    LEFT = "left"
    #: The last word ends on the buffer's last bit, slack is leading zeros.
    RIGHT = "right"


def coerce_int(value) -> int:
    """Collapse a numeric-like argument to an integer.

    Integers pass through, floats and numeric strings are floored, anything
    else (including NaN and infinities) becomes 0.

    :param value: Argument to coerce.
    :returns: Integer value.
    :rtype: int
    """
    if isinstance(value, numbers.Integral):
        return int(value)
    try:
        return math.floor(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _resolve_width(bit_width) -> Tuple[int, Alignment]:
    """Split a signed bit width into its magnitude and alignment.

    :param bit_width: Word width; negative selects right alignment.
    :returns: Tuple ``(width, alignment)``.
    :rtype: Tuple[int, Alignment]
    :raises ConfigurationError: If the width is not an integer whose
        magnitude lies between 1 and 32.
    """
    if isinstance(bit_width, bool) or not isinstance(
        bit_width, numbers.Real
    ):
        raise ConfigurationError(
            f"UintNArray bit width ({bit_width!r}) must be an integer"
        )
    if not math.isfinite(bit_width) or bit_width != int(bit_width):
        raise ConfigurationError(
            f"UintNArray bit width ({bit_width!r}) must be an integer"
        )
    width = abs(int(bit_width))
    if not MIN_BIT_WIDTH <= width <= MAX_BIT_WIDTH:
        raise ConfigurationError(
            f"UintNArray bit width ({bit_width}) must be between "
            f"{MIN_BIT_WIDTH} and {MAX_BIT_WIDTH}"
        )
    alignment = Alignment.RIGHT if bit_width < 0 else Alignment.LEFT
    return width, alignment


def _as_length(source) -> Optional[float]:
    """Return ``source`` as a number if it is a length argument, else None."""
    if isinstance(source, numbers.Real):
        number = float(source)
    elif isinstance(source, str):
        try:
            number = float(source)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


class UintNArray:
    """Array of unsigned integers of any width between 1 and 32 bits.

    Words are stored big-endian (most significant bit first) in a
    :class:`ByteBuffer`. A positive ``bit_width`` packs words from the first
    bit of the buffer (left alignment); a negative one packs them so that the
    last word ends on the buffer's last bit (right alignment), letting views
    of different widths over one buffer agree on the low-order bits.

    Views created by :meth:`subarray` and :meth:`reinterpret` share the
    buffer of the view they came from.

    :ivar bit_width: Width of each word in bits (always positive).
    :type bit_width: int
    :ivar alignment: Packing discipline.
    :type alignment: Alignment
    :ivar buffer: Backing storage.
    :type buffer: ByteBuffer
    :ivar bit_offset: Bit position of word 0 from the start of the buffer.
        Negative for right-aligned views whose first word has leading bits
        outside the buffer.
    :type bit_offset: int
    :ivar length: Number of words.
    :type length: int
    """

    def __init__(self, bit_width, source=None, bit_offset=None, length=None):
        """Create an array from a length, a word sequence or a buffer.

        - number or numeric string: ``source`` zero-valued words in a new
          buffer.
        - ``ByteBuffer``, ``bytearray`` or ``memoryview``: a view into that
          storage, no copy. ``bit_offset`` and ``length`` select the words;
          ``None`` means "work it out from the alignment".
        - any other iterable: a new buffer holding its values, each truncated
          to ``bit_width`` bits.
        - anything else: an empty array.

        :param bit_width: Word width between 1 and 32; negative for a
            right-aligned array.
        :type bit_width: int
        :param source: Length, words or buffer to build from.
        :param bit_offset: For buffers, bit position of the first word.
        :type bit_offset: Optional[int]
        :param length: For buffers, number of words.
        :type length: Optional[int]
        :returns: None
        :rtype: None
        :raises ConfigurationError: If ``bit_width`` is out of range.
        :raises BoundsError: If a length is negative or too large, or if an
            explicit offset/length does not fit the buffer.
        """
        self.bit_width, self.alignment = _resolve_width(bit_width)

        if isinstance(source, _BUFFER_TYPES):
            buffer = ByteBuffer.wrap(source)
            offset, count = self._resolve_view(
                buffer.bit_length, bit_offset, length
            )
            self._attach(buffer, offset, count)
            return

        number = _as_length(source)
        if number is not None:
            if not 0 <= number <= MAX_LENGTH:
                raise BoundsError(f"Invalid typed array length: {source}")
            self._allocate(math.floor(number))
            return

        if isinstance(source, Iterable) and not isinstance(source, str):
            words = list(source)
            self._allocate(len(words))
            for i, word in enumerate(words):
                self.set(i, coerce_int(word))
            return

        self._allocate(0)

    @classmethod
    def _view(cls, bit_width, alignment, buffer, bit_offset, length):
        """Build a view with an already resolved offset and length."""
        view = cls.__new__(cls)
        view.bit_width = bit_width
        view.alignment = alignment
        view._attach(buffer, bit_offset, length)
        return view

    def _attach(self, buffer: ByteBuffer, bit_offset: int, length: int):
        self.buffer = buffer
        self.bit_offset = bit_offset
        self.length = length

    def _allocate(self, count: int):
        """Attach a new zero-filled buffer sized for ``count`` words."""
        buffer = ByteBuffer.allocate(math.ceil(self.bit_width * count / 8))
        offset, count = self._resolve_view(buffer.bit_length, None, count)
        self._attach(buffer, offset, count)

    def _resolve_view(self, buffer_bits: int, bit_offset, length):
        """Work out the physical bit offset and word count of a view.

        Left alignment counts offsets from the first bit and requires every
        word to fit inside the buffer. Right alignment counts offsets in a
        frame of ``max_length`` whole words whose end coincides with the end
        of the buffer; the bits of that frame hanging off the front of the
        buffer (the slack) become leading zeros. Only offsets and lengths
        supplied by the caller are bounds-checked.

        :param buffer_bits: Size of the buffer in bits.
        :type buffer_bits: int
        :param bit_offset: Requested offset, or ``None`` for the default.
        :param length: Requested word count, or ``None`` for the default.
        :returns: Tuple ``(bit_offset, length)`` to store on the view.
        :rtype: Tuple[int, int]
        :raises BoundsError: If the requested offset or length is invalid.
        """
        width = self.bit_width

        if self.alignment is Alignment.LEFT:
            offset = 0 if bit_offset is None else coerce_int(bit_offset)
            if offset < 0 or offset > buffer_bits:
                raise BoundsError(
                    f"Bit offset {offset} is outside the bounds of the buffer"
                )
            if length is None:
                count = (buffer_bits - offset) // width
            else:
                count = coerce_int(length)
            if count < 0 or offset + count * width > buffer_bits:
                raise BoundsError(f"Invalid typed array length: {count}")
            return offset, count

        max_length = -(-buffer_bits // width)
        frame_bits = max_length * width
        slack = buffer_bits - frame_bits

        if bit_offset is None:
            count = max_length if length is None else coerce_int(length)
            if count < 0:
                raise BoundsError(f"Invalid typed array length: {count}")
            offset = (max_length - count) * width
        else:
            offset = coerce_int(bit_offset)
            if not 0 <= offset < frame_bits:
                raise BoundsError(
                    f"Bit offset {offset} is outside the bounds of the buffer"
                )
            if length is None:
                count = (frame_bits - offset) // width
            else:
                count = coerce_int(length)
                if count < 0:
                    raise BoundsError(f"Invalid typed array length: {count}")
        return offset + slack, count

    # -- metrics ---------------------------------------------------------

    @property
    def signed_width(self) -> int:
        """Bit width with the sign convention used by the constructor."""
        if self.alignment is Alignment.RIGHT:
            return -self.bit_width
        return self.bit_width

    @property
    def max_length(self) -> int:
        """Number of words the whole buffer holds for this alignment."""
        bits = self.buffer.bit_length
        if self.alignment is Alignment.RIGHT:
            return -(-bits // self.bit_width)
        return bits // self.bit_width

    @property
    def byte_length(self) -> float:
        return self.length * self.bit_width / 8

    @property
    def byte_offset(self) -> float:
        return self.bit_offset / 8

    # -- element access --------------------------------------------------

    def _in_range(self, index) -> bool:
        return (
            isinstance(index, numbers.Integral)
            and 0 <= index < self.length
        )

    def get(self, index: int) -> Optional[int]:
        """Return word ``index``.

        :param index: Word index.
        :type index: int
        :returns: The word value, ``0`` for a right-aligned word lying
            entirely before the buffer, or ``None`` if ``index`` is outside
            ``[0, length)``.
        :rtype: Optional[int]
        """
        if not self._in_range(index):
            return None
        value = get_bits(
            self.buffer.data,
            self.bit_offset + int(index) * self.bit_width,
            self.bit_width,
        )
        return 0 if value is None else value

    def set(self, index: int, value: int) -> None:
        """Store ``value`` truncated to ``bit_width`` bits at word ``index``.

        Out of range indices, and bits of right-aligned words that fall
        outside the buffer, are silently ignored.

        :param index: Word index.
        :type index: int
        :param value: New value; only its low ``bit_width`` bits are kept.
        :type value: int
        :returns: None
        :rtype: None
        """
        if not self._in_range(index):
            return
        set_bits(
            self.buffer.data,
            self.bit_offset + int(index) * self.bit_width,
            self.bit_width,
            coerce_int(value) & bit_mask(self.bit_width),
        )

    def assign(self, source, offset=0) -> None:
        """Copy the values of ``source`` into this array from word ``offset``.

        :param source: Iterable of word values.
        :param offset: Index of the first word to overwrite.
        :type offset: int
        :returns: None
        :rtype: None
        :raises TypeMismatchError: If ``source`` is not iterable.
        :raises BoundsError: If ``offset`` is negative or the values do not
            fit between ``offset`` and the end of the array.
        """
        if not isinstance(source, Iterable):
            raise TypeMismatchError(
                f"Cannot assign from non-iterable {type(source).__name__}"
            )
        words = list(source)
        offset = coerce_int(offset)
        if offset < 0 or len(words) + offset > self.length:
            raise BoundsError("offset is out of bounds")
        for i, word in enumerate(words):
            self.set(i + offset, word)

    # -- derived views ---------------------------------------------------

    def reinterpret(self, bit_width, bit_length=None) -> "UintNArray":
        """View the whole buffer at another word width.

        Any offset or length of this view is dropped. When the number of
        meaningful bits in the buffer is known, pass it as ``bit_length`` so
        repeated reinterpretation does not accumulate leading zero words.

        :param bit_width: New signed word width.
        :type bit_width: int
        :param bit_length: Number of meaningful bits in the buffer.
        :type bit_length: Optional[int]
        :returns: New array sharing this array's buffer.
        :rtype: UintNArray
        """
        if bit_length is None:
            return UintNArray(bit_width, self.buffer)
        width, alignment = _resolve_width(bit_width)
        count = -(-coerce_int(bit_length) // width)
        if alignment is Alignment.LEFT:
            count = min(count, self.buffer.bit_length // width)
        return UintNArray(bit_width, self.buffer, None, count)

    def subarray(self, begin=None, end=None) -> "UintNArray":
        """Return a view of words ``begin`` up to (excluding) ``end``.

        Negative bounds count from the end, non-numeric bounds count as 0 and
        everything is clamped to ``[0, length]``. The result shares the
        buffer and keeps this array's width and alignment.

        :param begin: First word, defaults to 0.
        :param end: Word after the last, defaults to ``length``.
        :returns: New array sharing this array's buffer.
        :rtype: UintNArray
        """
        begin = 0 if begin is None else coerce_int(begin)
        end = self.length if end is None else coerce_int(end)
        if begin < 0:
            begin += self.length
        if end < 0:
            end += self.length
        begin = min(max(begin, 0), self.length)
        end = min(max(end, begin), self.length)
        return self._view(
            self.bit_width,
            self.alignment,
            self.buffer,
            self.bit_offset + begin * self.bit_width,
            end - begin,
        )

    def trim_zeros(self) -> "UintNArray":
        """Drop the zero words on the padded side of the array.

        Right-aligned arrays lose their leading zeros, left-aligned arrays
        their trailing zeros. At least one word is always kept.

        :returns: New array sharing this array's buffer.
        :rtype: UintNArray
        """
        if self.alignment is Alignment.RIGHT:
            start = 0
            while start < self.length - 1 and self.get(start) == 0:
                start += 1
            return self.subarray(start)
        stop = self.length
        while stop > 1 and self.get(stop - 1) == 0:
            stop -= 1
        return self.subarray(0, stop)

    # -- sequence protocol -----------------------------------------------

    def __len__(self):
        return self.length

    def __iter__(self) -> Iterator[int]:
        for i in range(self.length):
            yield self.get(i)

    def __getitem__(self, key):
        if isinstance(key, slice):
            indices = range(*key.indices(self.length))
            return UintNArray(self.signed_width, [self.get(i) for i in indices])
        if isinstance(key, numbers.Integral):
            return self.get(key)
        raise TypeMismatchError(
            f"UintNArray indices must be integers or slices, "
            f"not {type(key).__name__}"
        )

    def __setitem__(self, key, value):
        if not isinstance(key, numbers.Integral):
            raise TypeMismatchError(
                f"UintNArray indices must be integers, "
                f"not {type(key).__name__}"
            )
        self.set(key, value)

    def tolist(self) -> List[int]:
        return list(self)

    def __str__(self):
        return ",".join(str(word) for word in self)

    def __repr__(self):
        return f"UintNArray({self.signed_width}, {self.tolist()!r})"
