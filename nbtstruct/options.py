from .enum import Compliant
from .exceptions import DepthExceeded, InvalidLength


INT32_MAX = (1 << 31) - 1


class CodecOptions(object):
    '''Knobs for reading/writing untrusted data.

    max_depth is the maximum nesting of containers (the root compound is at
    depth zero), max_length is the maximum number of elements accepted for
    a list or an array when decoding.'''

    def __init__(self, max_depth=512, max_length=16 * 1024 * 1024, compliant=Compliant.NONE):
        if max_depth < 0:
            raise ValueError(f'max_depth must be non negative, got {max_depth}')
        if not 0 <= max_length <= INT32_MAX:
            raise ValueError(f'max_length must be between 0 and {INT32_MAX}, got {max_length}')

        self.max_depth = max_depth
        self.max_length = max_length
        self.compliant = compliant

    def __repr__(self):
        return f'<{self.__class__.__name__}(max_depth={self.max_depth}, max_length={self.max_length}, compliant={self.compliant!r})>'

    def is_compliant(self, level: Compliant) -> bool:
        return bool(self.compliant & level)

    def check_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            raise DepthExceeded(f'nesting depth {depth} exceeds the limit of {self.max_depth}')

    def check_length(self, length: int, what: str) -> None:
        if length < 0:
            raise InvalidLength(f'{what} declares a negative length ({length})')
        if length > self.max_length:
            raise InvalidLength(f'{what} declares {length} elements, the limit is {self.max_length}')


DEFAULT_OPTIONS = CodecOptions()
