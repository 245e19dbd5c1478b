# Copyright (c) 2020-2022 Qianqian Fang <q.fang at neu.edu>. All rights reserved.
# Copyright (c) 2016-2019 Iotic Labs Ltd. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://github.com/NeuroJSON/pybj/blob/master/LICENSE
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.



from unittest import TestCase

import numpy as np

from ubjdraft.markers import (TYPE_INT8, TYPE_UINT8, TYPE_INT16, TYPE_INT32, TYPE_FLOAT32, TYPE_STRING, TYPE_CHAR,
                              ARRAY_START, ARRAY_END, OBJECT_START)
from ubjdraft.numeric import int_marker, pack_int, pack_float, narrow_float, unpack
from ubjdraft.tokenizer import Tokenizer, Cursor, TOKEN_END, TOKEN_DATA, ABSENT
from ubjdraft.exceptions import (EncoderException, DecoderException, INTEGER_MAGNITUDE, TRUNCATED_INPUT,
                                 MALFORMED_LENGTH)


class TestNumeric(TestCase):

    def test_int_marker(self):
        for marker, values in ((TYPE_UINT8, (1, 255)),
                               (TYPE_INT8, (0, -1, -128)),
                               (TYPE_INT16, (256, 32767, -129, -32768)),
                               (TYPE_INT32, (32768, 2147483647, -32769, -2147483648))):
            for value in values:
                self.assertEqual(int_marker(value), marker, value)
        for value in (2147483648, -2147483649):
            with self.assertRaises(EncoderException) as ctx:
                int_marker(value)
            self.assertEqual(ctx.exception.kind, INTEGER_MAGNITUDE)

    def test_pack_int(self):
        self.assertEqual(pack_int(5), TYPE_UINT8 + b'\x05')
        self.assertEqual(pack_int(-5), TYPE_INT8 + b'\xfb')
        self.assertEqual(pack_int(0x1234), TYPE_INT16 + b'\x12\x34')
        self.assertEqual(pack_int(0x12345678), TYPE_INT32 + b'\x12\x34\x56\x78')
        self.assertEqual(unpack(TYPE_INT32, b'\x12\x34\x56\x78'), 0x12345678)
        self.assertEqual(unpack(TYPE_INT16, b'\x80\x00'), -32768)

    def test_float(self):
        self.assertEqual(narrow_float(0.1), float(np.float32(0.1)))
        self.assertEqual(narrow_float(1e39), float('inf'))
        self.assertEqual(pack_float(-2.0), TYPE_FLOAT32 + b'\xc0\x00\x00\x00')
        self.assertEqual(unpack(TYPE_FLOAT32, b'\xc0\x00\x00\x00'), -2.0)


class TestTokenizer(TestCase):

    @staticmethod
    def tokens(raw, **kwargs):
        tokenizer = Tokenizer(raw, **kwargs)
        cursor = tokenizer.start()
        result = [cursor.token]
        while cursor.token.kind != TOKEN_END:
            cursor = tokenizer.advance(cursor)
            result.append(cursor.token)
        return result, cursor

    def test_tokens(self):
        tokens, cursor = self.tokens(b'[U\x01CaZ]')
        self.assertEqual([(token.kind, token.value, token.position) for token in tokens],
                         [(ARRAY_START, None, 0),
                          (TOKEN_DATA, 1, 1),
                          (TOKEN_DATA, 'a', 3),
                          (TOKEN_DATA, None, 5),
                          (ARRAY_END, None, 6),
                          (TOKEN_END, ABSENT, 7)])
        self.assertIsNone(cursor.fault)

    def test_end_does_not_move(self):
        tokenizer = Tokenizer(b'T')
        cursor = tokenizer.advance(tokenizer.start())
        self.assertEqual(cursor.token.kind, TOKEN_END)
        self.assertEqual(tokenizer.advance(cursor), cursor)
        self.assertEqual(Tokenizer(b'').start().token.kind, TOKEN_END)

    def test_cursor_is_a_value(self):
        tokenizer = Tokenizer(b'[TF]')
        cursor = tokenizer.start()
        first = tokenizer.advance(cursor)
        # advancing the same cursor again gives the same result
        self.assertEqual(tokenizer.advance(cursor), first)
        self.assertEqual(cursor.token.kind, ARRAY_START)
        self.assertEqual(first.token.value, True)
        self.assertIsInstance(first, Cursor)

    def test_strings(self):
        raw = TYPE_STRING + TYPE_UINT8 + b'\x03' + b'a\xffb'
        self.assertEqual(Tokenizer(raw).start().token.value, 'a\udcffb')
        self.assertEqual(Tokenizer(raw, raw_strings=True).start().token.value, b'a\xffb')
        self.assertEqual(Tokenizer(TYPE_CHAR + b'x', raw_strings=True).start().token.value, b'x')
        self.assertEqual(Tokenizer(TYPE_STRING + TYPE_INT8 + b'\x00').start().offset, 3)

    def test_strict(self):
        tokenizer = Tokenizer(OBJECT_START + TYPE_INT16 + b'\x01')
        cursor = tokenizer.start()
        with self.assertRaises(DecoderException) as ctx:
            tokenizer.advance(cursor)
        self.assertEqual(ctx.exception.kind, TRUNCATED_INPUT)
        self.assertEqual(ctx.exception.position, 1)
        self.assertTrue(ctx.exception.args[0].endswith('(at byte 1)'))

    def test_lenient(self):
        raw = ARRAY_START + TYPE_STRING + TYPE_FLOAT32 + b'\x00\x00\x00\x01' + b'x'
        tokenizer = Tokenizer(raw, strict=False)
        self.assertFalse(tokenizer.strict)
        cursor = tokenizer.advance(tokenizer.start())
        self.assertEqual(cursor.token, (TOKEN_DATA, ABSENT, 1))
        self.assertEqual(cursor.offset, len(raw))
        self.assertEqual(cursor.fault.kind, MALFORMED_LENGTH)
        # first fault is kept
        later = tokenizer.fault(cursor, TRUNCATED_INPUT, 'other', 2)
        self.assertIs(later.fault, cursor.fault)
        self.assertEqual(tokenizer.advance(later).token.kind, TOKEN_END)

    def test_invalid_input(self):
        for invalid in ('[]', 1, None, [1]):
            with self.assertRaises(TypeError):
                Tokenizer(invalid)

    def test_absent(self):
        self.assertFalse(ABSENT)
        self.assertEqual(repr(ABSENT), 'ABSENT')
        self.assertIsNot(ABSENT, None)
