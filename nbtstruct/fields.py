"""
A tag with a "direct representation": its payload is encoded without
reference to other tags, so here live the End sentinel, the numeric tags,
the String tag and the arrays. The containers are in core.py.

All the multi-byte quantities are big-endian.
"""
import numbers
import struct
from typing import Callable, List

from . import mutf8
from .enum import TagType
from .exceptions import (
    InvalidLength,
    NullOrMissingValue,
    TypeMismatch,
    ValueOutOfRange,
)
from .meta import MetaTag, id_of
from .options import DEFAULT_OPTIONS, CodecOptions, INT32_MAX
from .streams import Stream


STRING_MAX_LENGTH = 0xffff


def read_string(stream: Stream) -> str:
    '''Read an uint16 length-prefixed modified UTF-8 string'''
    length = stream.unpack('>H')
    return mutf8.decode(stream.read_exactly(length))


def encode_string(text: str, what: str = 'string') -> bytes:
    raw = mutf8.encode(text)
    if len(raw) > STRING_MAX_LENGTH:
        raise InvalidLength(f'{what} is {len(raw)} bytes once encoded, the maximum is {STRING_MAX_LENGTH}')

    return struct.pack('>H', len(raw)) + raw


def write_string(stream: Stream, text: str) -> None:
    stream.write(encode_string(text))


class Tag(object, metaclass=MetaTag):
    """Base class to subclass from.

    The concrete classes set "tag_type" and implement _set_value(), read()
    and write(); the value is kept in self._value.
    """
    tag_type: TagType = None

    def __init__(self, value):
        self.value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_value() not implemented")

    def __repr__(self):
        # containers hand back their pieces instead of recursing
        parts = []
        pending = [self]
        while pending:
            part = pending.pop()
            if isinstance(part, Tag):
                pending.extend(reversed(part._repr_parts()))
            else:
                parts.append(part)

        return ''.join(parts)

    def _repr_parts(self) -> list:
        return ['<%s(%r)>' % (self.__class__.__name__, self._value)]

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented

        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left.__class__ is not right.__class__ or not left._equal_payload(right):
                return False

            pending.extend(left._children_pairs(right))

        return True

    __hash__ = None

    def _equal_payload(self, other) -> bool:
        '''Compare this tag with one of the same class, children excluded'''
        return self._value == other._value

    def _children_pairs(self, other):
        return ()

    @property
    def tag_id(self) -> int:
        return id_of(self.tag_type)

    def get_reader(self) -> Callable:
        '''The decoding routine for another instance of this same kind'''
        return self.__class__.read

    @classmethod
    def read(cls, stream, depth: int = 0, options: CodecOptions = DEFAULT_OPTIONS) -> "Tag":
        raise NotImplementedError(f"method {cls.__name__}.read() not implemented")

    def write(self, stream, depth: int = 0, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}.write() not implemented")

    def pack(self, options: CodecOptions = DEFAULT_OPTIONS) -> bytes:
        '''Encode the payload (no type id, no name) and return it'''
        stream = Stream(b'')
        self.write(stream, options=options)

        return stream.getvalue()

    raw = property(fget=lambda self: self.pack())

    def unpack(self, stream, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        '''Decode a payload of this kind from the stream and use it as value'''
        self.__dict__.update(self.read(stream, options=options).__dict__)

    def copy(self) -> "Tag":
        '''A deep copy: nothing is shared with the original, however deep the tree'''
        duplicate = self._shallow_copy()
        pending = [duplicate]
        while pending:
            pending.extend(pending.pop()._copy_children())

        return duplicate

    def __deepcopy__(self, memo):
        return self.copy()

    def _shallow_copy(self) -> "Tag":
        duplicate = self.__class__.__new__(self.__class__)
        duplicate.__dict__.update(self.__dict__)

        return duplicate

    def _copy_children(self):
        '''Replace the children with shallow copies of them and return the copies'''
        return ()


class EndTag(Tag):
    '''The sentinel closing a compound: it has no payload at all'''
    tag_type = TagType.END

    def __init__(self):
        self._value = None

    def _repr_parts(self) -> list:
        return [f'<{self.__class__.__name__}>']

    def _set_value(self, value) -> None:
        if value is not None:
            raise TypeMismatch(f'{self.__class__.__name__} has no value')

    @classmethod
    def read(cls, stream, depth=0, options=DEFAULT_OPTIONS):
        return cls()

    def write(self, stream, depth=0, options=DEFAULT_OPTIONS):
        pass


class StructTag(Tag):
    """
    Numeric tags: mimic the behaviour of the struct module packing/unpacking
    a single value to/from big-endian bytes.
    """
    format: str = None

    @classmethod
    def get_format(cls) -> str:
        return '>%s' % cls.format

    @classmethod
    def get_size(cls) -> int:
        return struct.calcsize(cls.get_format())

    def _coerce(self, value):
        raise NotImplementedError()

    def _set_value(self, value) -> None:
        if value is None:
            raise NullOrMissingValue(f'value of {self.__class__.__name__} cannot be None')

        self._value = self._coerce(value)

    @classmethod
    def read(cls, stream, depth=0, options=DEFAULT_OPTIONS):
        return cls(Stream.wrap(stream).unpack(cls.get_format()))

    def write(self, stream, depth=0, options=DEFAULT_OPTIONS):
        Stream.wrap(stream).pack(self.get_format(), self._value)


class IntegralTag(StructTag):

    @classmethod
    def get_bounds(cls):
        bits = cls.get_size() * 8
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def _coerce(self, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeMismatch(f'{self.__class__.__name__} needs an integer, got {value.__class__.__name__}')

        value = int(value)
        low, high = self.get_bounds()
        if not low <= value <= high:
            raise ValueOutOfRange(f'{value} does not fit into {self.__class__.__name__} ({low}..{high})')

        return value

    def __int__(self):
        return self._value

    def __index__(self):
        return self._value


class ByteTag(IntegralTag):
    tag_type = TagType.BYTE
    format = 'b'


class ShortTag(IntegralTag):
    tag_type = TagType.SHORT
    format = 'h'


class IntTag(IntegralTag):
    tag_type = TagType.INT
    format = 'i'


class LongTag(IntegralTag):
    tag_type = TagType.LONG
    format = 'q'


class FloatingTag(StructTag):

    def _coerce(self, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeMismatch(f'{self.__class__.__name__} needs a real number, got {value.__class__.__name__}')

        # round to the precision of the wire format so that the value
        # in memory is the one a reader gets back
        try:
            return struct.unpack(self.get_format(), struct.pack(self.get_format(), float(value)))[0]
        except (OverflowError, struct.error) as e:
            raise ValueOutOfRange(f'{value} does not fit into {self.__class__.__name__}: {e}') from None

    def _equal_payload(self, other) -> bool:
        # bitwise, as on the wire: NaN equals itself, 0.0 differs from -0.0
        return struct.pack(self.get_format(), self._value) == struct.pack(other.get_format(), other._value)

    def __float__(self):
        return self._value


class FloatTag(FloatingTag):
    tag_type = TagType.FLOAT
    format = 'f'


class DoubleTag(FloatingTag):
    tag_type = TagType.DOUBLE
    format = 'd'


class StringTag(Tag):
    """Text, encoded on the wire as modified UTF-8 prefixed by its length in bytes."""
    tag_type = TagType.STRING

    def _set_value(self, value) -> None:
        if value is None:
            raise NullOrMissingValue(f'value of {self.__class__.__name__} cannot be None')
        if not isinstance(value, str):
            raise TypeMismatch(f'{self.__class__.__name__} needs a str, got {value.__class__.__name__}')

        self._raw = encode_string(value)
        self._value = value

    def __str__(self):
        return self._value

    def __len__(self):
        return len(self._value)

    @classmethod
    def read(cls, stream, depth=0, options=DEFAULT_OPTIONS):
        return cls(read_string(Stream.wrap(stream)))

    def write(self, stream, depth=0, options=DEFAULT_OPTIONS):
        Stream.wrap(stream).write(self._raw)


class ArrayTag(Tag):
    '''Un/Pack an array of fixed width integers.

    The array behaves like a python list with its elements validated on
    assignment, but cannot grow or shrink in place: assign a new value
    to do that.'''
    format: str = None

    @classmethod
    def get_element_size(cls) -> int:
        return struct.calcsize('>%s' % cls.format)

    @classmethod
    def get_bounds(cls):
        bits = cls.get_element_size() * 8
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def __init__(self, value=()):
        super().__init__(value)

    def _get_value(self) -> List[int]:
        return list(self._value)

    def _check_element(self, element) -> int:
        if isinstance(element, bool) or not isinstance(element, numbers.Integral):
            raise TypeMismatch(f'{self.__class__.__name__} holds integers, got {element.__class__.__name__}')

        element = int(element)
        low, high = self.get_bounds()
        if not low <= element <= high:
            raise ValueOutOfRange(f'{element} does not fit into an element of {self.__class__.__name__} ({low}..{high})')

        return element

    def _set_value(self, value) -> None:
        if value is None:
            raise NullOrMissingValue(f'value of {self.__class__.__name__} cannot be None')
        if isinstance(value, str):
            raise TypeMismatch(f'{self.__class__.__name__} holds integers, got a str')

        values = [self._check_element(_) for _ in value]
        if len(values) > INT32_MAX:
            raise InvalidLength(f'{self.__class__.__name__} cannot hold more than {INT32_MAX} elements')

        self._value = values

    def _shallow_copy(self) -> "ArrayTag":
        duplicate = super()._shallow_copy()
        duplicate._value = list(self._value)

        return duplicate

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __getitem__(self, item):
        return self._value[item]

    def __setitem__(self, item, value):
        if isinstance(item, slice):
            raise TypeError(f'{self.__class__.__name__} cannot be resized, set the value instead')
        self._value[item] = self._check_element(value)

    @classmethod
    def read(cls, stream, depth=0, options=DEFAULT_OPTIONS):
        stream = Stream.wrap(stream)

        count = stream.unpack('>i')
        options.check_length(count, cls.__name__)

        raw = stream.read_exactly(count * cls.get_element_size())
        cls.logger.debug('unpacked %s with %d elements' % (cls.__name__, count))

        return cls(struct.unpack('>%d%s' % (count, cls.format), raw))

    def write(self, stream, depth=0, options=DEFAULT_OPTIONS):
        stream = Stream.wrap(stream)

        count = len(self._value)
        stream.pack('>i', count)
        stream.pack('>%d%s' % (count, self.format), *self._value)


class ByteArrayTag(ArrayTag):
    """Signed bytes: bytes/bytearray are accepted as value and
    reinterpreted as such."""
    tag_type = TagType.BYTE_ARRAY
    format = 'b'

    def _set_value(self, value) -> None:
        if isinstance(value, (bytes, bytearray, memoryview)):
            value = struct.unpack('>%db' % len(value), value)

        super()._set_value(value)

    def __bytes__(self):
        return struct.pack('>%db' % len(self._value), *self._value)


class IntArrayTag(ArrayTag):
    tag_type = TagType.INT_ARRAY
    format = 'i'


class LongArrayTag(ArrayTag):
    tag_type = TagType.LONG_ARRAY
    format = 'q'
