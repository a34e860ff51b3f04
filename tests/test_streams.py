import io
import unittest

from nbtstruct.exceptions import TruncatedStream
from nbtstruct.streams import Stream


class StreamTests(unittest.TestCase):

    def test_bytes_stream_read_all(self):
        data = b'\x01\x02\x03\x04\x05'

        stream = Stream(data)

        self.assertEqual(stream.read(1), b'\x01')
        self.assertEqual(stream.read(1), b'\x02')
        self.assertEqual(stream.read_all(), b'\x03\x04\x05')
        self.assertEqual(stream.tell(), 5)

    def test_file_stream_read_all(self):
        data = b'\x01\x02\x03\x04\x05'
        f = io.BytesIO(data)

        stream = Stream(f)

        self.assertIs(stream.obj, f)
        self.assertEqual(stream.read_exactly(2), b'\x01\x02')
        self.assertEqual(stream.read_all(), b'\x03\x04\x05')
        self.assertEqual(stream.tell(), 5)

    def test_read_exactly_short(self):
        stream = Stream(b'\x01\x02')

        with self.assertRaises(EOFError):
            stream.read_exactly(3)

    def test_read_exactly_short_is_an_os_error(self):
        stream = Stream(b'\x01')

        with self.assertRaises(OSError) as cm:
            stream.read_exactly(2)

        self.assertIsInstance(cm.exception, TruncatedStream)

    def test_unpack(self):
        stream = Stream(b'\x00\x2a\xff\xff\xff\xfe\x07')

        self.assertEqual(stream.unpack('>h'), 42)
        self.assertEqual(stream.unpack('>iB'), (-2, 7))

    def test_pack(self):
        stream = Stream(b'')

        stream.pack('>Bi', 9, 3)

        self.assertEqual(stream.getvalue(), b'\x09\x00\x00\x00\x03')

    def test_wrap(self):
        stream = Stream(b'')

        self.assertIs(Stream.wrap(stream), stream)
        self.assertIsInstance(Stream.wrap(bytearray(b'\x01')), Stream)

    def test_not_a_stream(self):
        with self.assertRaises(TypeError):
            Stream(42)
        with self.assertRaises(TypeError):
            Stream('/tmp/some/path')

    def test_does_not_close(self):
        f = io.BytesIO(b'\x01')
        stream = Stream(f)
        del stream

        self.assertFalse(f.closed)
