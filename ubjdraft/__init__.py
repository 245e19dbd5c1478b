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



"""UBJSON (legacy draft) implementation without No-Op, int64/float64 or optimized container support

Example usage:

# To encode
encoded = ubjdraft.dumpb({'a': 1})

# To decode
decoded = ubjdraft.loadb(encoded)

# To decode without raising, keeping whatever precedes a fault
result = ubjdraft.decode(encoded, strict=False)
if result.fault is not None:
    ...
"""

from .encoder import dumpb, EncoderException
from .decoder import decode, loadb, DecodeResult, DecoderException, ABSENT, DEFAULT_MAX_DEPTH

__version__ = '0.1.0'

__all__ = ('dumpb', 'EncoderException', 'decode', 'loadb', 'DecodeResult', 'DecoderException', 'ABSENT',
           'DEFAULT_MAX_DEPTH')
