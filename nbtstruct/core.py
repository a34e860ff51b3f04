"""
The containers of the format: the List, an ordered sequence of tags of the
same kind, and the Compound, a mapping from names to tags.

They are the only recursive tags, so they are the ones keeping track of
the nesting depth while reading and writing: each container checks its own
depth against the options and passes depth + 1 to its children.
"""
from collections.abc import Mapping
from typing import Iterable, List, Optional, Type, Union

from .enum import Compliant, TagType
from .exceptions import (
    NBTException,
    DuplicateName,
    InvalidLength,
    InvalidTagType,
    NullOrMissingValue,
    TypeMismatch,
)
from .fields import (
    Tag,
    EndTag,
    ByteTag,
    ShortTag,
    IntTag,
    LongTag,
    FloatTag,
    DoubleTag,
    StringTag,
    ByteArrayTag,
    IntArrayTag,
    LongArrayTag,
    encode_string,
    read_string,
    write_string,
)
from .meta import MetaTag, id_of, reader_for, type_of
from .options import DEFAULT_OPTIONS, INT32_MAX
from .streams import Stream


def resolve_type(element_type: Union[TagType, int, Type[Tag]]) -> TagType:
    '''Accept the kind as TagType, as numeric id or as tag class'''
    if isinstance(element_type, TagType):
        return element_type
    if isinstance(element_type, MetaTag) and element_type.tag_type is not None:
        return element_type.tag_type

    return type_of(element_type)


class ListTag(Tag):
    '''An ordered sequence of tags, all of the kind declared by element_type.

    The declared kind is checked on every way in: construction, assignment
    of the value and all the list-like mutations. An empty list still has a
    declared kind (END unless indicated otherwise) and it's written on the
    wire.

    The list owns its elements: a tag going in is copied.

        >>> ListTag([IntTag(1), IntTag(2)])
        <ListTag(INT, [<IntTag(1)>, <IntTag(2)>])>
    '''
    tag_type = TagType.LIST

    def __init__(self, value=(), element_type=None):
        self._element_type = resolve_type(element_type) if element_type is not None else None
        super().__init__(value)

    def _repr_parts(self) -> list:
        parts = ['<%s(%s, [' % (self.__class__.__name__, self._element_type.name)]
        for element in self._value:
            parts.extend([element, ', '])
        if self._value:
            parts.pop()
        parts.append('])>')

        return parts

    def _equal_payload(self, other) -> bool:
        return self._element_type == other._element_type and len(self._value) == len(other._value)

    def _children_pairs(self, other):
        return zip(self._value, other._value)

    def _copy_children(self):
        self._value = [element._shallow_copy() for element in self._value]

        return self._value

    def _get_element_type(self) -> TagType:
        return self._element_type

    def _set_element_type(self, element_type) -> None:
        element_type = resolve_type(element_type)
        for idx, element in enumerate(self._value):
            self._check_element(element, element_type, idx)

        self._element_type = element_type

    element_type = property(fget=_get_element_type, fset=_set_element_type)

    @staticmethod
    def _check_element(element, element_type: TagType, idx=None) -> Tag:
        position = '' if idx is None else f' at index {idx}'
        if element is None:
            raise NullOrMissingValue(f'a list cannot contain None{position}')
        if not isinstance(element, Tag):
            raise TypeMismatch(f'a list contains tags, got {element.__class__.__name__}{position}')
        if isinstance(element, EndTag):
            raise TypeMismatch(f'{element.__class__.__name__} cannot be an element of a list')
        if element.tag_type != element_type:
            raise TypeMismatch(f'cannot put {element.tag_type.name}{position} into a list of {element_type.name}')

        return element

    def _adopt(self, element, idx=None) -> Tag:
        '''Validate the element and return the copy the list will own'''
        return self._check_element(element, self._element_type, idx).copy()

    def _get_value(self) -> List[Tag]:
        return list(self._value)

    def _set_value(self, value) -> None:
        if value is None:
            raise NullOrMissingValue(f'value of {self.__class__.__name__} cannot be None')
        if isinstance(value, (str, bytes, Mapping)):
            raise TypeMismatch(f'{self.__class__.__name__} needs a sequence of tags, got {value.__class__.__name__}')

        elements = list(value)

        element_type = self._element_type
        if element_type is None:
            first = elements[0] if elements else None
            element_type = first.tag_type if isinstance(first, Tag) else TagType.END

        for idx, element in enumerate(elements):
            self._check_element(element, element_type, idx)
        # the same tag given twice still ends up as two elements
        elements = [element.copy() for element in elements]

        if len(elements) > INT32_MAX:
            raise InvalidLength(f'{self.__class__.__name__} cannot hold more than {INT32_MAX} elements')

        self._element_type = element_type
        self._value = elements

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __getitem__(self, item):
        return self._value[item]

    def __setitem__(self, item, value):
        if isinstance(item, slice):
            elements = [self._check_element(_, self._element_type) for _ in value]
            self._value[item] = [_.copy() for _ in elements]
        else:
            self._value[item] = self._adopt(value, item)

    def __delitem__(self, item):
        del self._value[item]

    def append(self, element: Tag) -> None:
        self._value.append(self._adopt(element))

    def insert(self, idx: int, element: Tag) -> None:
        self._value.insert(idx, self._adopt(element))

    def extend(self, elements: Iterable[Tag]) -> None:
        # validate everything before touching the list
        elements = [self._check_element(_, self._element_type) for _ in elements]
        self._value.extend(_.copy() for _ in elements)

    def pop(self, idx: int = -1) -> Tag:
        return self._value.pop(idx)

    def remove(self, element: Tag) -> None:
        self._value.remove(element)

    def clear(self) -> None:
        self._value.clear()

    def index(self, element: Tag) -> int:
        return self._value.index(element)

    @classmethod
    def read(cls, stream, depth=0, options=DEFAULT_OPTIONS):
        stream = Stream.wrap(stream)
        options.check_depth(depth)

        element_type = type_of(stream.unpack('>B'))
        count = stream.unpack('>i')
        options.check_length(count, cls.__name__)

        if element_type == TagType.END and count > 0:
            raise InvalidTagType(f'a list of {count} elements must declare their type, not END')

        cls.logger.debug('unpacking %s of %d %s at depth %d', cls.__name__, count, element_type.name, depth)

        reader = reader_for(element_type)
        elements = []
        for idx in range(count):
            try:
                elements.append(reader(stream, depth + 1, options))
            except NBTException as e:
                e.chain.insert(0, idx)
                raise

        # freshly decoded, nothing to copy
        lst = cls.__new__(cls)
        lst._element_type = element_type
        lst._value = elements

        return lst

    def write(self, stream, depth=0, options=DEFAULT_OPTIONS):
        stream = Stream.wrap(stream)
        options.check_depth(depth)

        stream.pack('>Bi', id_of(self._element_type), len(self._value))
        for idx, element in enumerate(self._value):
            try:
                element.write(stream, depth + 1, options)
            except NBTException as e:
                e.chain.insert(0, idx)
                raise


class CompoundTag(Tag):
    '''A mapping from names to tags, terminated on the wire by an END type id.

    The entries are kept (and so written) in insertion order, two compounds
    with the same entries are equal whatever the order.

    Looking up with the get*() methods never fails: they return None when
    the name is missing or, for the typed ones, when the tag is of another
    kind. The item access, compound[name], raises KeyError as a dict does.

    As for the list, a tag put into the compound is copied, the entries are
    never shared with another parent.
    '''
    tag_type = TagType.COMPOUND

    def __init__(self, value=()):
        super().__init__(value)

    def _get_value(self) -> dict:
        return dict(self._value)

    @staticmethod
    def _check_name(name) -> str:
        if name is None:
            raise NullOrMissingValue('the name of a compound entry cannot be None')
        if not isinstance(name, str):
            raise TypeMismatch(f'the name of a compound entry must be a str, got {name.__class__.__name__}')

        encode_string(name, what='compound entry name')

        return name

    @staticmethod
    def _check_tag(tag, name) -> Tag:
        if tag is None:
            raise NullOrMissingValue(f'the tag named {name!r} cannot be None')
        if not isinstance(tag, Tag):
            raise TypeMismatch(f'the entry named {name!r} must be a tag, got {tag.__class__.__name__}')
        if isinstance(tag, EndTag):
            raise TypeMismatch(f'{tag.__class__.__name__} cannot be the value of an entry')

        return tag

    def _adopt(self, tag, name) -> Tag:
        return self._check_tag(tag, name).copy()

    def _set_value(self, value) -> None:
        if value is None:
            raise NullOrMissingValue(f'value of {self.__class__.__name__} cannot be None')
        if isinstance(value, (str, bytes)):
            raise TypeMismatch(f'{self.__class__.__name__} needs a mapping, got {value.__class__.__name__}')

        items = value.items() if hasattr(value, 'items') else value

        entries = {}
        for name, tag in items:
            entries[self._check_name(name)] = self._adopt(tag, name)

        self._value = entries

    def _repr_parts(self) -> list:
        parts = ['<%s({' % self.__class__.__name__]
        for name, tag in self._value.items():
            parts.extend(['%r: ' % name, tag, ', '])
        if self._value:
            parts.pop()
        parts.append('})>')

        return parts

    def _equal_payload(self, other) -> bool:
        return self._value.keys() == other._value.keys()

    def _children_pairs(self, other):
        return ((tag, other._value[name]) for name, tag in self._value.items())

    def _copy_children(self):
        self._value = {name: tag._shallow_copy() for name, tag in self._value.items()}

        return self._value.values()

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __contains__(self, name):
        return name in self._value

    def __getitem__(self, name) -> Tag:
        return self._value[name]

    def __setitem__(self, name, tag):
        self.put(name, tag)

    def __delitem__(self, name):
        del self._value[name]

    def keys(self):
        return self._value.keys()

    def values(self):
        return self._value.values()

    def items(self):
        return self._value.items()

    def size(self) -> int:
        return len(self._value)

    def is_empty(self) -> bool:
        return not self._value

    def contains(self, name: str) -> bool:
        return name in self._value

    def contains_tag(self, tag: Tag) -> bool:
        '''True if an entry, whatever its name, is equal to the tag'''
        return any(_ == tag for _ in self._value.values())

    def put(self, name: str, tag: Tag) -> Optional[Tag]:
        '''Set the entry and return the tag it replaced, if any'''
        name = self._check_name(name)
        previous = self._value.get(name)
        self._value[name] = self._adopt(tag, name)

        return previous

    def put_if_absent(self, name: str, tag: Tag) -> Optional[Tag]:
        '''Set the entry only if the name is free, returns the tag already there otherwise'''
        name = self._check_name(name)
        if name in self._value:
            return self._value[name]

        self._value[name] = self._adopt(tag, name)

        return None

    def remove(self, name: str) -> Optional[Tag]:
        return self._value.pop(name, None)

    def remove_if_equal(self, name: str, tag: Tag) -> bool:
        if name in self._value and self._value[name] == tag:
            del self._value[name]
            return True

        return False

    def get(self, name: str, default=None) -> Optional[Tag]:
        return self._value.get(name, default)

    find = get

    def get_as(self, name: str, tag_cls: Type[Tag]) -> Optional[Tag]:
        tag = self._value.get(name)

        return tag if isinstance(tag, tag_cls) else None

    def get_byte(self, name: str) -> Optional[ByteTag]:
        return self.get_as(name, ByteTag)

    def get_short(self, name: str) -> Optional[ShortTag]:
        return self.get_as(name, ShortTag)

    def get_int(self, name: str) -> Optional[IntTag]:
        return self.get_as(name, IntTag)

    def get_long(self, name: str) -> Optional[LongTag]:
        return self.get_as(name, LongTag)

    def get_float(self, name: str) -> Optional[FloatTag]:
        return self.get_as(name, FloatTag)

    def get_double(self, name: str) -> Optional[DoubleTag]:
        return self.get_as(name, DoubleTag)

    def get_byte_array(self, name: str) -> Optional[ByteArrayTag]:
        return self.get_as(name, ByteArrayTag)

    def get_int_array(self, name: str) -> Optional[IntArrayTag]:
        return self.get_as(name, IntArrayTag)

    def get_long_array(self, name: str) -> Optional[LongArrayTag]:
        return self.get_as(name, LongArrayTag)

    def get_string(self, name: str) -> Optional[StringTag]:
        return self.get_as(name, StringTag)

    def get_list(self, name: str) -> Optional[ListTag]:
        return self.get_as(name, ListTag)

    def get_compound(self, name: str) -> Optional["CompoundTag"]:
        return self.get_as(name, CompoundTag)

    def _put_new(self, name: str, tag: Tag) -> Tag:
        # the tag was just built here, the compound can own it as it is
        self._value[self._check_name(name)] = tag
        return tag

    def put_byte(self, name: str, value: int) -> ByteTag:
        return self._put_new(name, ByteTag(value))

    def put_short(self, name: str, value: int) -> ShortTag:
        return self._put_new(name, ShortTag(value))

    def put_int(self, name: str, value: int) -> IntTag:
        return self._put_new(name, IntTag(value))

    def put_long(self, name: str, value: int) -> LongTag:
        return self._put_new(name, LongTag(value))

    def put_float(self, name: str, value: float) -> FloatTag:
        return self._put_new(name, FloatTag(value))

    def put_double(self, name: str, value: float) -> DoubleTag:
        return self._put_new(name, DoubleTag(value))

    def put_byte_array(self, name: str, value) -> ByteArrayTag:
        return self._put_new(name, ByteArrayTag(value))

    def put_int_array(self, name: str, value) -> IntArrayTag:
        return self._put_new(name, IntArrayTag(value))

    def put_long_array(self, name: str, value) -> LongArrayTag:
        return self._put_new(name, LongArrayTag(value))

    def put_string(self, name: str, value: str) -> StringTag:
        return self._put_new(name, StringTag(value))

    def put_list(self, name: str, value=(), element_type=None) -> ListTag:
        return self._put_new(name, ListTag(value, element_type))

    def put_compound(self, name: str, value=()) -> "CompoundTag":
        return self._put_new(name, CompoundTag(value))

    @classmethod
    def read(cls, stream, depth=0, options=DEFAULT_OPTIONS):
        '''Read entries up to, and including, the first END type id'''
        stream = Stream.wrap(stream)
        options.check_depth(depth)

        entries = {}
        while True:
            tag_type = type_of(stream.unpack('>B'))
            if tag_type == TagType.END:
                break

            name = read_string(stream)
            cls.logger.debug('unpacking %s.%s (%s) at depth %d', cls.__name__, name, tag_type.name, depth)

            try:
                tag = reader_for(tag_type)(stream, depth + 1, options)
            except NBTException as e:
                e.chain.insert(0, name)
                raise

            if name in entries:
                if options.is_compliant(Compliant.DUPLICATE_NAMES):
                    raise DuplicateName(f'the name {name!r} is repeated in the compound', chain=[name])
                cls.logger.warning('duplicate entry named \'%s\' in compound, the last one wins', name)

            entries[name] = tag

        compound = cls.__new__(cls)
        compound._value = entries

        return compound

    def write(self, stream, depth=0, options=DEFAULT_OPTIONS):
        stream = Stream.wrap(stream)
        options.check_depth(depth)

        for name, tag in self._value.items():
            self.logger.debug('packing %s.%s (%s) at depth %d', self.__class__.__name__, name, tag.tag_type.name, depth)

            stream.pack('>B', tag.tag_id)
            write_string(stream, name)
            try:
                tag.write(stream, depth + 1, options)
            except NBTException as e:
                e.chain.insert(0, name)
                raise

        stream.pack('>B', id_of(TagType.END))
