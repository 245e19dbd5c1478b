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



"""UBJSON (legacy draft) encoder"""

from io import BytesIO
from re import compile as re_compile
from decimal import Decimal
from operator import itemgetter
from collections.abc import Mapping, Sequence

from numpy import ndarray, generic as npgeneric

from .markers import (TYPE_NULL, TYPE_BOOL_TRUE, TYPE_BOOL_FALSE, TYPE_HIGH_PREC, TYPE_CHAR, TYPE_STRING,
                      OBJECT_START, OBJECT_END, ARRAY_START, ARRAY_END)
from .numeric import pack_int, pack_float
from .exceptions import EncoderException, UNSUPPORTED_VALUE

__all__ = ('dumpb', 'EncoderException')

__STRING_TYPES = (str, bytes, bytearray, memoryview)
# plain decimal numeral, e.g. 123 or 3.1415
__HIGH_PREC_MATCH = re_compile(br'[0-9]+(?:\.[0-9]+)?').fullmatch


def __encode_raw_string(fp_write, raw):
    # single byte is always a char, even for digits
    if len(raw) == 1:
        fp_write(TYPE_CHAR)
        fp_write(raw)
        return
    fp_write(TYPE_HIGH_PREC if __HIGH_PREC_MATCH(raw) else TYPE_STRING)
    fp_write(pack_int(len(raw)))
    fp_write(raw)


def __encode_string(fp_write, item):
    if isinstance(item, str):
        try:
            item = item.encode('utf-8', 'surrogateescape')
        except UnicodeEncodeError as ex:
            raise EncoderException('Failed to encode string as UTF-8', UNSUPPORTED_VALUE) from ex
    __encode_raw_string(fp_write, bytes(item))


def __encode_key(fp_write, key):
    if isinstance(key, __STRING_TYPES):
        __encode_string(fp_write, key)
    elif isinstance(key, int) and not isinstance(key, bool):
        __encode_string(fp_write, str(key))
    else:
        raise EncoderException('Mapping keys can only be strings or integers (got %s)' % type(key).__name__)


def __is_index_sequence(items):
    """True if keys are exactly 0..n-1 in order (vacuously so for no items)"""
    for index, (key, _) in enumerate(items):
        if isinstance(key, bool) or not isinstance(key, int) or key != index:
            return False
    return True


def __enter_container(seen_containers, item):
    container_id = id(item)
    if container_id in seen_containers:
        raise EncoderException('Circular reference detected')
    seen_containers[container_id] = item
    return container_id


def __encode_mapping(fp_write, item, seen_containers, sort_keys, default):
    container_id = __enter_container(seen_containers, item)

    items = [(key, value) for key, value in item.items()]
    if sort_keys:
        try:
            items.sort(key=itemgetter(0))
        except TypeError as ex:
            raise EncoderException('Cannot sort mapping keys of mixed types', UNSUPPORTED_VALUE) from ex

    if __is_index_sequence(items):
        fp_write(ARRAY_START)
        for _, value in items:
            __encode_value(fp_write, value, seen_containers, sort_keys, default)
        fp_write(ARRAY_END)
    else:
        fp_write(OBJECT_START)
        for key, value in items:
            __encode_key(fp_write, key)
            __encode_value(fp_write, value, seen_containers, sort_keys, default)
        fp_write(OBJECT_END)

    del seen_containers[container_id]


def __encode_sequence(fp_write, item, seen_containers, sort_keys, default):
    container_id = __enter_container(seen_containers, item)

    fp_write(ARRAY_START)
    for value in item:
        __encode_value(fp_write, value, seen_containers, sort_keys, default)
    fp_write(ARRAY_END)

    del seen_containers[container_id]


def __encode_value(fp_write, item, seen_containers, sort_keys, default):  # pylint: disable=too-many-branches
    # containers are told apart before any scalar handling
    if isinstance(item, Mapping):
        __encode_mapping(fp_write, item, seen_containers, sort_keys, default)

    elif isinstance(item, ndarray):
        __encode_value(fp_write, item.tolist(), seen_containers, sort_keys, default)

    elif isinstance(item, Sequence) and not isinstance(item, __STRING_TYPES):
        __encode_sequence(fp_write, item, seen_containers, sort_keys, default)

    elif item is None:
        fp_write(TYPE_NULL)

    elif item is True:
        fp_write(TYPE_BOOL_TRUE)

    elif item is False:
        fp_write(TYPE_BOOL_FALSE)

    elif isinstance(item, int):
        fp_write(pack_int(item))

    elif isinstance(item, float):
        fp_write(pack_float(item))

    elif isinstance(item, __STRING_TYPES):
        __encode_string(fp_write, item)

    elif isinstance(item, Decimal):
        __encode_string(fp_write, format(item, 'f'))

    elif isinstance(item, npgeneric):
        __encode_value(fp_write, item.item(), seen_containers, sort_keys, default)

    elif default is not None:
        __encode_value(fp_write, default(item), seen_containers, sort_keys, default)

    else:
        raise EncoderException('Cannot encode item of type %s' % type(item), UNSUPPORTED_VALUE)


def dumpb(obj, sort_keys=False, default=None):
    """Returns the given object as UBJSON in a bytes instance.

    Args:
        obj: Object to encode
        sort_keys (bool): Whether to sort items in mappings by key
        default (callable): Called for objects which cannot be serialized.
                            Should return a UBJSON-encodable version of the
                            object or raise an EncoderException.

    Raises:
        EncoderException: If an encoding failure occured.

    Python types are mapped to UBJSON types as follows:

        +-----------------------------+------------------------------------+
        | Python                      | UBJSON                             |
        +=============================+====================================+
        | str                         | string (UTF-8 encoded)             |
        | bytes, bytearray,           | string (raw)                       |
        | memoryview                  |                                    |
        +-----------------------------+------------------------------------+
        | - 1 byte long               | char                               |
        | - decimal numeral           | high_precision                     |
        +-----------------------------+------------------------------------+
        | None                        | null                               |
        +-----------------------------+------------------------------------+
        | bool                        | true, false                        |
        +-----------------------------+------------------------------------+
        | int                         | uint8, int8, int16, int32          |
        +-----------------------------+------------------------------------+
        | float                       | float32                            |
        +-----------------------------+------------------------------------+
        | Decimal                     | string / high_precision            |
        +-----------------------------+------------------------------------+
        | Sequence, numpy.ndarray     | array                              |
        +-----------------------------+------------------------------------+
        | Mapping                     | object, or array if the keys are   |
        |                             | exactly 0..n-1 in order            |
        +-----------------------------+------------------------------------+

    Notes:
    - Integers outside of the signed 32-bit range cannot be encoded (int64 is
      not supported) and floats always lose precision to 32 bits.
    - Mapping keys can be strings or integers, the latter being written as
      their decimal string. An empty mapping is written as an empty array.
    - numpy scalars are encoded as the equivalent Python type.
    """
    if not (default is None or callable(default)):
        raise TypeError('default not callable')
    with BytesIO() as fp:
        __encode_value(fp.write, obj, {}, sort_keys, default)
        return fp.getvalue()
