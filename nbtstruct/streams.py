import io
import logging
import struct

from .exceptions import TruncatedStream


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file objects to uniform their
    properties: the codec needs exact reads and struct (un)packing.

    The wrapped object is owned by the caller, nothing here closes it.'''
    def __init__(self, obj=b''):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)
        return getattr(self.obj, name)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.obj!r})>'

    @classmethod
    def wrap(cls, obj):
        return obj if isinstance(obj, cls) else cls(obj)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_str(self):
        raise TypeError('paths are not streams, open the file (or use NBTFile) and pass the file object')

    def init_file(self):
        '''Any object with read() and/or write() will do'''
        if not (hasattr(self.obj, 'read') or hasattr(self.obj, 'write')):
            raise TypeError('\'%s\' is not a stream nor bytes' % self._type.__name__)

        logger.debug('wrapping stream %r' % self.obj)

    def read_exactly(self, n: int) -> bytes:
        '''Read n bytes or fail: a stream ending early is a TruncatedStream.'''
        if n == 0:
            return b''

        data = self.obj.read(n)
        if len(data) != n:
            raise TruncatedStream(f'expected {n} bytes, the stream gave {len(data)}')

        return data

    def read_all(self) -> bytes:
        return self.obj.read()

    def write(self, data):
        return self.obj.write(data)

    def unpack(self, fmt: str):
        '''Read and unpack with the struct format, single values are returned as they are'''
        values = struct.unpack(fmt, self.read_exactly(struct.calcsize(fmt)))

        return values[0] if len(values) == 1 else values

    def pack(self, fmt: str, *values):
        return self.obj.write(struct.pack(fmt, *values))

    def getvalue(self) -> bytes:
        return self.obj.getvalue()
