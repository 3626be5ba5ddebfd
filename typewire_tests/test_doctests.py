import doctest
import importlib

import pytest

MODULES_WITH_DOCTESTS = [
    'typewire.derive.casing',
    'typewire.derive.shape',
    'typewire.serialization.encoding.bool',
    'typewire.serialization.encoding.float',
    'typewire.serialization.encoding.int',
    'typewire.serialization.encoding.lenenc',
    'typewire.serialization.encoding.utf8',
    'typewire.utils.dict',
    'typewire.utils.typing',
]


@pytest.mark.parametrize('module_name', MODULES_WITH_DOCTESTS)
def test_doctests(module_name: str) -> None:
    module = importlib.import_module(module_name)
    result = doctest.testmod(module)
    assert result.attempted > 0
    assert result.failed == 0
