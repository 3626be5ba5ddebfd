import unittest
from typing import Any

from structlog import get_logger

from typewire.encode import EncodeContract, IsNull
from typewire.serialization import Serializer

logger = get_logger()
main = unittest.main


class TestCase(unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.log = logger.new(test=self.id())

    def encode_nullable(self, contract: EncodeContract[Any], value: Any) -> tuple[IsNull, bytes]:
        """Run `encode_nullable` on a fresh buffer, returns its result and the bytes that were written."""
        serializer = Serializer.build_bytes_serializer()
        is_null = contract.encode_nullable(value, serializer)
        return is_null, bytes(serializer.finalize())

    def assertWireIdentical(self, contract: EncodeContract[Any], value: Any,
                            other: EncodeContract[Any], other_value: Any) -> None:
        """Both contracts must write the same bytes and give the same size hint for their values."""
        self.assertEqual(contract.to_bytes(value), other.to_bytes(other_value))
        self.assertEqual(contract.size_hint(value), other.size_hint(other_value))
