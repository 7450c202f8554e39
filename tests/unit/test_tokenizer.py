import unittest

from bdecode.errors import (InvalidIntegerEncoding, InvalidStringLength, TruncatedByteString, UnexpectedByte,
                            UnexpectedEndOfInput)
from bdecode.tokenizer import (BYTE_E, Token, classify, expect, peek_token, scan_bytes, scan_integer,
                               scan_length)


class TestClassify(unittest.TestCase):
    def test_markers(self):
        self.assertIs(classify(ord('i')), Token.INTEGER)
        self.assertIs(classify(ord('l')), Token.LIST)
        self.assertIs(classify(ord('d')), Token.DICTIONARY)
        self.assertIs(classify(ord('e')), Token.END)

    def test_digits(self):
        for digit in b'0123456789':
            self.assertIs(classify(digit), Token.BYTES)

    def test_other_bytes(self):
        for byte in b'-+:xI ':
            self.assertIsNone(classify(byte))

    def test_peek_token(self):
        data = memoryview(b'i1e')
        self.assertIs(peek_token(data, 0), Token.INTEGER)
        self.assertIs(peek_token(data, 2), Token.END)
        with self.assertRaises(UnexpectedEndOfInput):
            peek_token(data, 3)
        with self.assertRaises(UnexpectedByte) as cm:
            peek_token(memoryview(b'x'), 0)
        self.assertEqual(cm.exception.offset, 0)

    def test_expect(self):
        self.assertEqual(expect(memoryview(b'le'), 1, BYTE_E), 2)
        with self.assertRaises(UnexpectedByte):
            expect(memoryview(b'le'), 0, BYTE_E)
        with self.assertRaises(UnexpectedEndOfInput):
            expect(memoryview(b'l'), 1, BYTE_E)


class TestScanInteger(unittest.TestCase):
    def test_scan(self):
        self.assertEqual(scan_integer(memoryview(b'i5e'), 0), (5, 3))
        self.assertEqual(scan_integer(memoryview(b'i1337e1:a'), 0), (1337, 6))
        self.assertEqual(scan_integer(memoryview(b'i-9e'), 0), (-9, 4))
        self.assertEqual(scan_integer(memoryview(b'xxi123123e'), 2), (123123, 10))

    def test_errors(self):
        for data in (b'i-0e', b'i00e', b'i-00e', b'i01e', b'i0123e'):
            with self.assertRaises(InvalidIntegerEncoding):
                scan_integer(memoryview(data), 0)

    def test_not_an_integer(self):
        with self.assertRaises(UnexpectedByte):
            scan_integer(memoryview(b'l1i2ee'), 0)


class TestScanBytes(unittest.TestCase):
    def test_scan_length(self):
        self.assertEqual(scan_length(memoryview(b'2:qt'), 0), (2, 2))
        self.assertEqual(scan_length(memoryview(b'0:'), 0), (0, 2))
        self.assertEqual(scan_length(memoryview(b'10:0123456789'), 0), (10, 3))

    def test_scan_bytes_stops_at_length(self):
        self.assertEqual(scan_bytes(memoryview(b'2:rust'), 0), (2, 4))
        self.assertEqual(scan_bytes(memoryview(b'3:joker'), 0), (2, 5))
        self.assertEqual(scan_bytes(memoryview(b'4:forest'), 0), (2, 6))

    def test_errors(self):
        with self.assertRaises(UnexpectedByte):
            scan_length(memoryview(b'error'), 0)
        with self.assertRaises(UnexpectedByte):
            scan_length(memoryview(b'-1:error'), 0)
        with self.assertRaises(InvalidStringLength):
            scan_length(memoryview(b'00:error'), 0)
        with self.assertRaises(TruncatedByteString):
            scan_bytes(memoryview(b'7:error'), 0)
        with self.assertRaises(UnexpectedEndOfInput):
            scan_length(memoryview(b''), 0)
