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



"""Encoding & decoding failures"""

# Decoding fault kinds
TRUNCATED_INPUT = 'truncated-input'
MALFORMED_LENGTH = 'malformed-length-prefix'
UNEXPECTED_TOKEN = 'unexpected-token'
UNSUPPORTED_MARKER = 'unsupported-marker'
DEPTH_EXCEEDED = 'depth-limit-exceeded'
NO_VALUE = 'no-value'

# Encoding fault kinds
INTEGER_MAGNITUDE = 'unsupported-integer-magnitude'
UNSUPPORTED_VALUE = 'unsupported-value-kind'


class EncoderException(TypeError):
    """Raised when encoding of an object fails."""

    def __init__(self, message, kind=UNSUPPORTED_VALUE):
        super(EncoderException, self).__init__(message)
        self.kind = kind


class DecoderException(ValueError):
    """Raised when decoding of a UBJSON buffer fails. In lenient mode the same exception is returned (not raised) as
    the fault of a decode call."""

    def __init__(self, message, position=None, kind=TRUNCATED_INPUT):
        if position is not None:
            super(DecoderException, self).__init__('%s (at byte %d)' % (message, position), position)
        else:
            super(DecoderException, self).__init__(str(message), None)
        self.kind = kind

    @property
    def position(self):
        """Offset of the tag byte at which decoding failed, if known."""
        return self.args[1]  # pylint: disable=unsubscriptable-object
