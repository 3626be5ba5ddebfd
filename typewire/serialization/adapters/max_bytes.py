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

from typing import TypeVar

from typing_extensions import override

from typewire.serialization.exceptions import SerializationError
from typewire.serialization.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)


class MaxBytesExceededError(SerializationError):
    """ Raised when a value would take more bytes than its encoding allows, like a text above the field size limit.

    Nothing is written by the write that fails, but what was written before it stays in the buffer, so the buffer
    should be discarded.
    """

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(f'value exceeds the limit of {max_bytes} bytes')


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    """ Limits how many bytes can be appended through it, patching doesn't count since it doesn't grow the buffer.
    """

    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        self._max_bytes = max_bytes
        self._bytes_left = max_bytes

    @property
    def bytes_left(self) -> int:
        return self._bytes_left

    def _consume(self, write_size: int) -> None:
        if write_size > self._bytes_left:
            raise MaxBytesExceededError(self._max_bytes)
        self._bytes_left -= write_size

    @override
    def write_byte(self, data: int) -> None:
        self._consume(1)
        super().write_byte(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        data_view = memoryview(data)
        self._consume(len(data_view))
        super().write_bytes(data_view)
