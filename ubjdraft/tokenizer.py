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



"""Pull tokenizer over a complete UBJSON (legacy draft) buffer.

The tokenizer itself only holds the immutable input and the error policy. Progress is carried by Cursor values which
are passed into and returned from every call, so nested decoding never shares hidden mutable state.
"""

from logging import getLogger
from collections import namedtuple

from .markers import (TYPE_NULL, TYPE_BOOL_TRUE, TYPE_BOOL_FALSE, TYPE_HIGH_PREC, TYPE_CHAR, TYPE_STRING, OBJECT_START,
                      OBJECT_END, ARRAY_START, ARRAY_END)
from .numeric import INT_STRUCTS, FIXED_WIDTH, unpack
from .exceptions import DecoderException, TRUNCATED_INPUT, MALFORMED_LENGTH, UNSUPPORTED_MARKER

log = getLogger(__name__)

# Token kinds (besides the four container delimiters, which are their own kind)
TOKEN_END = 'end'
TOKEN_DATA = 'data'


class _Absent(object):
    """Marks that no value was produced, as opposed to a decoded null (None)"""

    __slots__ = ()

    def __repr__(self):
        return 'ABSENT'

    def __bool__(self):
        return False


ABSENT = _Absent()

Token = namedtuple('Token', ('kind', 'value', 'position'))
# offset: where the next token starts, token: the current token, fault: first fault recorded in lenient mode
Cursor = namedtuple('Cursor', ('offset', 'token', 'fault'))

_CONSTANTS = {TYPE_NULL: None,
              TYPE_BOOL_TRUE: True,
              TYPE_BOOL_FALSE: False}
_DELIMITERS = frozenset((OBJECT_START, OBJECT_END, ARRAY_START, ARRAY_END))
_STRINGS = frozenset((TYPE_STRING, TYPE_HIGH_PREC))


class Tokenizer(object):
    """Produces one token per advance() call.

    Args:
        data (bytes): Complete input
        strict (bool): If set, faults raise DecoderException. Otherwise the first fault is recorded in the cursor,
                       the current step yields ABSENT and the cursor skips to the end of input.
        raw_strings (bool): If set, string/char payloads are returned as bytes rather than str.
    """

    def __init__(self, data, strict=True, raw_strings=False):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError('Expected bytes-like input, got %s' % type(data).__name__)
        self.__data = bytes(data)
        self.__length = len(self.__data)
        self.__strict = strict
        self.__raw_strings = raw_strings

    @property
    def strict(self):
        return self.__strict

    def start(self):
        """Returns a cursor positioned on the first token"""
        return self.advance(Cursor(0, Token(TOKEN_END, ABSENT, 0), None))

    def fault(self, cursor, kind, message, position, token_kind=TOKEN_DATA):
        """Raises in strict mode. In lenient mode returns a cursor at the end of input carrying the fault."""
        ex = DecoderException(message, position, kind)
        if self.__strict:
            raise ex
        log.debug('Recorded decoding fault: %s', ex)
        return Cursor(self.__length, Token(token_kind, ABSENT, position), cursor.fault or ex)

    def advance(self, cursor):
        """Returns a new cursor positioned on the token following the one at the given cursor"""
        offset = cursor.offset
        if offset >= self.__length:
            return cursor._replace(token=Token(TOKEN_END, ABSENT, offset))

        position = offset
        marker = self.__data[offset:offset + 1]
        offset += 1

        if marker in _CONSTANTS:
            return Cursor(offset, Token(TOKEN_DATA, _CONSTANTS[marker], position), cursor.fault)

        if marker in _DELIMITERS:
            return Cursor(offset, Token(marker, None, position), cursor.fault)

        if marker in FIXED_WIDTH:
            end = offset + FIXED_WIDTH[marker].size
            if end > self.__length:
                return self.fault(cursor, TRUNCATED_INPUT, 'Insufficient input for %s' % marker.decode(), position)
            value = unpack(marker, self.__data[offset:end])
            return Cursor(end, Token(TOKEN_DATA, value, position), cursor.fault)

        if marker == TYPE_CHAR:
            return self.__read_raw(cursor, offset, 1, position)

        if marker in _STRINGS:
            return self.__read_string(cursor, offset, position)

        return self.fault(cursor, UNSUPPORTED_MARKER, 'Unsupported marker %r' % marker, position, TOKEN_END)

    def __read_string(self, cursor, offset, position):
        # string marker is followed by an integer marker giving the byte length
        length_marker = self.__data[offset:offset + 1]
        if not length_marker:
            return self.fault(cursor, TRUNCATED_INPUT, 'String length missing', position)
        if length_marker not in INT_STRUCTS:
            return self.fault(cursor, MALFORMED_LENGTH, 'Integer marker expected for string length', position)
        offset += 1
        end = offset + INT_STRUCTS[length_marker].size
        if end > self.__length:
            return self.fault(cursor, TRUNCATED_INPUT, 'String length too short', position)
        length = unpack(length_marker, self.__data[offset:end])
        if length < 0:
            return self.fault(cursor, MALFORMED_LENGTH, 'Negative string length', position)
        return self.__read_raw(cursor, end, length, position)

    def __read_raw(self, cursor, offset, length, position):
        end = offset + length
        if end > self.__length:
            return self.fault(cursor, TRUNCATED_INPUT, 'Insufficient input for string of length %d' % length,
                              position)
        raw = self.__data[offset:end]
        value = raw if self.__raw_strings else raw.decode('utf-8', 'surrogateescape')
        return Cursor(end, Token(TOKEN_DATA, value, position), cursor.fault)
