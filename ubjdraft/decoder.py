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



"""UBJSON (legacy draft) decoder"""

from sys import intern
from logging import getLogger
from collections import namedtuple

from .markers import OBJECT_START, OBJECT_END, ARRAY_START, ARRAY_END
from .tokenizer import Tokenizer, TOKEN_END, TOKEN_DATA, ABSENT
from .exceptions import DecoderException, UNEXPECTED_TOKEN, DEPTH_EXCEEDED, NO_VALUE

__all__ = ('decode', 'loadb', 'DecodeResult', 'DecoderException', 'ABSENT', 'DEFAULT_MAX_DEPTH')

log = getLogger(__name__)

# Each level of nesting uses two stack frames, so stay well within the default recursion limit
DEFAULT_MAX_DEPTH = 256

# value is ABSENT if nothing could be decoded. fault is only ever set in lenient mode.
DecodeResult = namedtuple('DecodeResult', ('value', 'fault'))

__CLOSING = {ARRAY_START: ARRAY_END, OBJECT_START: OBJECT_END}
__CLOSE_MARKERS = frozenset((ARRAY_END, OBJECT_END))

_Options = namedtuple('_Options', ('object_hook', 'object_pairs_hook', 'intern_object_keys', 'max_depth'))


def __decode_value(tokenizer, cursor, opts, depth):
    """Returns (value, cursor). Does not advance if there is no value at the cursor (end of input or close marker)."""
    kind = cursor.token.kind
    if kind == TOKEN_DATA:
        # a top-level value is the last one decoded, so trailing input is never tokenized
        return cursor.token.value, (tokenizer.advance(cursor) if depth else cursor)
    if kind in __CLOSING:
        return __decode_container(tokenizer, cursor, opts, depth + 1)
    return ABSENT, cursor


def __decode_container(tokenizer, cursor, opts, depth):  # pylint: disable=too-many-branches
    opening = cursor.token
    if depth > opts.max_depth:
        return ABSENT, tokenizer.fault(cursor, DEPTH_EXCEEDED, 'Maximum nesting depth (%d) exceeded' % opts.max_depth,
                                       opening.position, TOKEN_END)
    closing = __CLOSING[opening.kind]
    in_mapping = opening.kind == OBJECT_START
    pairs = []

    cursor = tokenizer.advance(cursor)
    while cursor.token.kind not in (TOKEN_END, closing):
        token = cursor.token
        if token.kind in __CLOSE_MARKERS:
            cursor = tokenizer.fault(cursor, UNEXPECTED_TOKEN, 'Mismatched container end %r' % token.kind,
                                     token.position, TOKEN_END)
            break

        if in_mapping:
            if token.kind != TOKEN_DATA or not isinstance(token.value, (str, bytes)):
                cursor = tokenizer.fault(cursor, UNEXPECTED_TOKEN, 'String key expected within object',
                                         token.position, TOKEN_END)
                break
            key = token.value
            if opts.intern_object_keys and isinstance(key, str):
                key = intern(key)
            cursor = tokenizer.advance(cursor)
        else:
            key = len(pairs)

        value, cursor = __decode_value(tokenizer, cursor, opts, depth)
        if value is not ABSENT:
            pairs.append((key, value))

    # step past the close marker so that the enclosing container sees the next token
    if depth > 1:
        cursor = tokenizer.advance(cursor)

    if not in_mapping:
        return [value for _, value in pairs], cursor
    if opts.object_pairs_hook is not None:
        return opts.object_pairs_hook(pairs), cursor
    # later duplicates overwrite earlier ones
    return opts.object_hook(dict(pairs)), cursor


def __object_hook_noop(obj):
    return obj


def decode(chars, object_hook=None, object_pairs_hook=None, intern_object_keys=False, raw_strings=False,
           strict=True, max_depth=DEFAULT_MAX_DEPTH):
    """Decodes the first UBJSON value in the given bytes-like object. Trailing input is ignored.

    Args:
        chars (bytes): Complete input, decoding from partial input is not supported
        object_hook (callable): Called with the result of any object literal
                                decoded (instead of dict).
        object_pairs_hook (callable): Called with the result of any object
                                      literal decoded with an ordered list of
                                      pairs (instead of dict). Takes precedence
                                      over object_hook.
        intern_object_keys (bool): If set, object keys are interned which can
                                   provide a memory saving when many repeated
                                   keys are used.
        raw_strings (bool): If set, strings, chars & object keys are returned
                            as bytes. Otherwise they are decoded as UTF-8,
                            with invalid bytes kept as lone surrogates so that
                            re-encoding gives back the original bytes.
        strict (bool): If set (default), any fault raises DecoderException.
                       Otherwise the first fault is returned in the result and
                       whatever could be decoded up to it is kept.
        max_depth (int): Maximum container nesting.

    Returns:
        DecodeResult(value, fault) where value is ABSENT if the input did not
        start with a value and fault is a DecoderException (lenient mode) or
        None.

    Raises:
        DecoderException: In strict mode, if the input is malformed.
        TypeError: If chars is not bytes-like.

    UBJSON types are mapped to Python types as follows:

        +----------------------------------+---------------+
        | UBJSON                           | Python        |
        +==================================+===============+
        | object                           | dict          |
        +----------------------------------+---------------+
        | array                            | list          |
        +----------------------------------+---------------+
        | string, high_precision, char     | str (bytes)   |
        +----------------------------------+---------------+
        | uint8, int8, int16, int32        | int           |
        +----------------------------------+---------------+
        | float32                          | float         |
        +----------------------------------+---------------+
        | true                             | True          |
        +----------------------------------+---------------+
        | false                            | False         |
        +----------------------------------+---------------+
        | null                             | None          |
        +----------------------------------+---------------+
    """
    if object_pairs_hook is None and object_hook is None:
        object_hook = __object_hook_noop
    tokenizer = Tokenizer(chars, strict=strict, raw_strings=raw_strings)
    opts = _Options(object_hook, object_pairs_hook, intern_object_keys, max_depth)

    value, cursor = __decode_value(tokenizer, tokenizer.start(), opts, 0)
    if cursor.fault is not None:
        log.debug('Decoded with fault: %s', cursor.fault)
    return DecodeResult(value, cursor.fault)


def loadb(chars, object_hook=None, object_pairs_hook=None, intern_object_keys=False, raw_strings=False,
          max_depth=DEFAULT_MAX_DEPTH):
    """Decodes and returns UBJSON from the given bytes or bytearray object, raising on any fault. See decode() for
    available arguments."""
    value = decode(chars, object_hook=object_hook, object_pairs_hook=object_pairs_hook,
                   intern_object_keys=intern_object_keys, raw_strings=raw_strings, max_depth=max_depth).value
    if value is ABSENT:
        raise DecoderException('No value to decode', 0, NO_VALUE)
    return value
