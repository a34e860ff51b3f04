class NBTException(Exception):
    '''Base class to extend in order to throw exception in nbtstruct.

    Other than the message it takes the chain of the layers that caused the
    exception: the containers re-raising it prepend the name (or index) of
    the entry that failed, so that once at the top the chain is the path
    from the root to the broken tag.
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        path = '.'.join(str(_) for _ in self.chain)
        return f'{self.message} (at {path})'


class InvalidTagType(NBTException, ValueError):
    pass


class InvalidLength(NBTException, ValueError):
    pass


class NullOrMissingValue(NBTException, ValueError):
    pass


class TypeMismatch(NBTException, TypeError):
    pass


class ValueOutOfRange(NBTException, ValueError):
    pass


class DepthExceeded(NBTException):
    '''The nesting of containers went over CodecOptions.max_depth.'''
    pass


class DuplicateName(NBTException, ValueError):
    pass


class TruncatedStream(EOFError, OSError):
    '''The stream ended before the tag did: an EOFError that is also caught
    as any other failure of the stream, by except OSError.'''
    pass
