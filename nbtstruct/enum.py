from enum import Enum, Flag


class TagType(Enum):
    '''The closed set of tag kinds, the value is the id used on the wire'''
    END        = 0
    BYTE       = 1
    SHORT      = 2
    INT        = 3
    LONG       = 4
    FLOAT      = 5
    DOUBLE     = 6
    BYTE_ARRAY = 7
    STRING     = 8
    LIST       = 9
    COMPOUND   = 10
    INT_ARRAY  = 11
    LONG_ARRAY = 12


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE            = 0
    DUPLICATE_NAMES = 1 << 0  # reject a compound repeating an entry name
