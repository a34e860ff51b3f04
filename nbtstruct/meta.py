import logging
from typing import Callable, Dict, Type

from .enum import TagType
from .exceptions import InvalidTagType


logger = logging.getLogger(__name__)

_registry: Dict[TagType, Type["Tag"]] = {}


def type_of(type_id: int) -> TagType:
    '''Translate the id read from the wire into its kind.'''
    if not isinstance(type_id, int) or isinstance(type_id, bool):
        raise InvalidTagType(f'tag type id must be an integer, got {type_id!r}')

    try:
        return TagType(type_id)
    except ValueError:
        raise InvalidTagType(f'unknown tag type id {type_id!r}') from None


def id_of(tag_type: TagType) -> int:
    return tag_type.value


def class_for(tag_type: TagType) -> Type["Tag"]:
    try:
        return _registry[tag_type]
    except KeyError:
        raise InvalidTagType(f'no tag class registered for {tag_type!r}') from None


def reader_for(tag_type: TagType) -> Callable:
    '''Returns the decoding routine for the given kind: it's called as
    reader(stream, depth, options) and returns a new tag.'''
    return class_for(tag_type).read


def registered_types():
    return sorted(_registry, key=id_of)


class MetaTag(type):
    '''Every class with a "tag_type" attribute defined in its body is the
    implementation of that kind and it's added to the registry.

    Abstract classes in the hierarchy simply don't define it.'''

    def __new__(cls, names, bases, attrs):
        new_cls = super(MetaTag, cls).__new__(cls, names, bases, attrs)

        new_cls.logger = logging.getLogger(new_cls.__module__)

        tag_type = attrs.get('tag_type')
        if tag_type is not None:
            cls.add_to_registry(tag_type, new_cls)

        return new_cls

    @staticmethod
    def add_to_registry(tag_type, tag_cls):
        if not isinstance(tag_type, TagType):
            raise AttributeError(f'class {tag_cls.__name__} has tag_type {tag_type!r} that is not a TagType')
        if tag_type in _registry:
            raise AttributeError(f'{tag_type!r} is already implemented by class {_registry[tag_type].__name__}')

        logger.debug('registering %s for %s' % (tag_cls.__name__, tag_type))
        _registry[tag_type] = tag_cls
