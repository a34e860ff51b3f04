'''
# Modified UTF-8

The text encoding of the format (the one used by java.io.DataOutput) is
UTF-8 with two exceptions:

 1. the code point U+0000 is encoded with two bytes, C0 80, so that the
    encoded text never contains a zero byte
 2. code points outside the BMP are first split into their UTF-16 surrogate
    pair and each surrogate is encoded on its own with three bytes, so
    six bytes in total where UTF-8 would use four

Decoding accepts what java.io.DataInput.readUTF() accepts: one, two and
three bytes sequences; the four bytes form of standard UTF-8 is an error.
'''
import struct

__all__ = [
    'encode',
    'decode',
]

ENCODING_NAME = 'modified-utf-8'


def _encode_unit(unit: int, out: bytearray) -> None:
    if 0 < unit < 0x80:
        out.append(unit)
    elif unit < 0x800:
        out.append(0xc0 | (unit >> 6))
        out.append(0x80 | (unit & 0x3f))
    else:
        out.append(0xe0 | (unit >> 12))
        out.append(0x80 | ((unit >> 6) & 0x3f))
        out.append(0x80 | (unit & 0x3f))


def encode(text: str) -> bytes:
    if text.isascii() and '\x00' not in text:
        return text.encode('ascii')

    out = bytearray()
    for char in text:
        code_point = ord(char)
        if code_point > 0xffff:
            code_point -= 0x10000
            _encode_unit(0xd800 | (code_point >> 10), out)
            _encode_unit(0xdc00 | (code_point & 0x3ff), out)
        else:
            _encode_unit(code_point, out)

    return bytes(out)


def decode(data: bytes) -> str:
    data = bytes(data)
    if data.isascii():
        return data.decode('ascii')

    units = []
    idx, end = 0, len(data)
    while idx < end:
        first = data[idx]
        if first < 0x80:
            units.append(first)
            idx += 1
        elif first & 0xe0 == 0xc0:
            if idx + 2 > end or data[idx + 1] & 0xc0 != 0x80:
                raise UnicodeDecodeError(ENCODING_NAME, data, idx, min(idx + 2, end), 'invalid continuation byte')
            units.append(((first & 0x1f) << 6) | (data[idx + 1] & 0x3f))
            idx += 2
        elif first & 0xf0 == 0xe0:
            if idx + 3 > end or data[idx + 1] & 0xc0 != 0x80 or data[idx + 2] & 0xc0 != 0x80:
                raise UnicodeDecodeError(ENCODING_NAME, data, idx, min(idx + 3, end), 'invalid continuation byte')
            units.append(((first & 0x0f) << 12) | ((data[idx + 1] & 0x3f) << 6) | (data[idx + 2] & 0x3f))
            idx += 3
        else:
            raise UnicodeDecodeError(ENCODING_NAME, data, idx, idx + 1, 'invalid start byte')

    # the UTF-16 codec joins the surrogate pairs, lone surrogates pass through
    return struct.pack('>%dH' % len(units), *units).decode('utf-16-be', 'surrogatepass')
