#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

from typing_extensions import override

from .exceptions import OutOfRangePatchError
from .serializer import Serializer
from .types import Buffer


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    Everything is written to a single `bytearray`, so previously written bytes can be patched in place.
    """

    def __init__(self) -> None:
        self._data = bytearray()

    @override
    def finalize(self) -> memoryview:
        result = memoryview(bytes(self._data))
        del self._data
        return result

    @override
    def cur_pos(self) -> int:
        return len(self._data)

    @override
    def write_byte(self, data: int) -> None:
        # int.to_bytes checks for correct range
        self._data += int.to_bytes(data, length=1, byteorder='big')

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._data += memoryview(data)

    @override
    def patch_bytes(self, pos: int, data: Buffer) -> None:
        part = memoryview(data)
        end = pos + len(part)
        if pos < 0 or end > len(self._data):
            raise OutOfRangePatchError(f'cannot patch [{pos}, {end}) of a {len(self._data)} bytes buffer')
        self._data[pos:end] = part
