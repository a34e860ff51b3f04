"""
Entry point to read and write a whole tree.

The tree is always rooted in a compound and its payload is written exactly
as it would be as the value of an entry; the named root of a complete
document is framing handled by nbtstruct.document.
"""
import logging

from .core import CompoundTag
from .exceptions import TypeMismatch
from .options import DEFAULT_OPTIONS, CodecOptions
from .streams import Stream


logger = logging.getLogger(__name__)


def read(stream, options: CodecOptions = None) -> CompoundTag:
    '''Materialize the tree read from stream, that can be a file-like object or bytes.'''
    options = options or DEFAULT_OPTIONS
    stream = Stream.wrap(stream)

    logger.debug('reading tree from %r with %r', stream, options)

    return CompoundTag.read(stream, 0, options)


def write(tree: CompoundTag, stream, options: CodecOptions = None) -> None:
    options = options or DEFAULT_OPTIONS
    if not isinstance(tree, CompoundTag):
        raise TypeMismatch(f'the root of a tree must be a CompoundTag, got {tree.__class__.__name__}')

    stream = Stream.wrap(stream)

    logger.debug('writing tree with %d entries to %r', len(tree), stream)

    tree.write(stream, 0, options)


def loads(data: bytes, options: CodecOptions = None) -> CompoundTag:
    return read(Stream(data), options)


def dumps(tree: CompoundTag, options: CodecOptions = None) -> bytes:
    stream = Stream(b'')
    write(tree, stream, options)

    return stream.getvalue()
