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



"""Integer width selection and big-endian packing shared by encoder & tokenizer"""

from struct import Struct

from numpy import float32, errstate

from .markers import TYPE_INT8, TYPE_UINT8, TYPE_INT16, TYPE_INT32, TYPE_FLOAT32
from .exceptions import EncoderException, INTEGER_MAGNITUDE

INT32_MIN = -2147483648
INT32_MAX = 2147483647

# All multi-byte payloads are big-endian regardless of host byte order
INT_STRUCTS = {TYPE_INT8: Struct('>b'),
               TYPE_UINT8: Struct('>B'),
               TYPE_INT16: Struct('>h'),
               TYPE_INT32: Struct('>i')}
FLOAT_STRUCT = Struct('>f')

FIXED_WIDTH = dict(INT_STRUCTS)
FIXED_WIDTH[TYPE_FLOAT32] = FLOAT_STRUCT


def int_marker(value):
    """Returns the marker of the narrowest integer type able to hold value.

    Positive values up to 255 use uint8, zero and small negatives int8. Negatives which do not fit a single signed
    byte move up to int16/int32 rather than being truncated.

    Raises:
        EncoderException: if value needs more than 32 bits.
    """
    if 0 < value < 256:
        return TYPE_UINT8
    if -128 <= value <= 0:
        return TYPE_INT8
    if -32768 <= value < 32768:
        return TYPE_INT16
    if INT32_MIN <= value <= INT32_MAX:
        return TYPE_INT32
    raise EncoderException('Integer %d needs more than 32 bits (int64 not supported)' % value, INTEGER_MAGNITUDE)


def pack_int(value):
    """Marker followed by big-endian payload"""
    marker = int_marker(value)
    return marker + INT_STRUCTS[marker].pack(value)


def narrow_float(value):
    """Rounds value to single precision. Magnitudes beyond float32 range become infinite, like a C cast."""
    with errstate(over='ignore'):
        return float(float32(value))


def pack_float(value):
    return TYPE_FLOAT32 + FLOAT_STRUCT.pack(narrow_float(value))


def unpack(marker, raw):
    # raw must be exactly FIXED_WIDTH[marker].size long
    return FIXED_WIDTH[marker].unpack(raw)[0]
