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

from pathlib import Path
from typing import Any, Union

import yaml

from typewire.utils.dict import deep_merged

# key of a settings file that names the file it is based on, relative to its own directory
EXTENDS_KEY = 'extends'


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Read a yaml file that must contain a mapping, an empty file gives an empty dict."""
    path = Path(filepath)
    if not path.is_file():
        raise ValueError(f"'{filepath}' is not a file")

    with path.open('r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")
    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """
    Like `dict_from_yaml`, but a file can extend another one through the 'extends' key, the values of the extending
    file are deep merged over the values of the base file. Chains of extensions are followed, cycles are an error.

    The 'extends' key is not present in the returned dict.
    """
    chain: list[Path] = []
    path: Path | None = Path(filepath)
    while path is not None:
        resolved = path.resolve()
        if resolved in (p.resolve() for p in chain):
            raise ValueError(f"'{path}' extends itself")
        chain.append(path)
        base = dict_from_yaml(filepath=path).get(EXTENDS_KEY)
        path = path.parent / str(base) if base else None

    result: dict[str, Any] = {}
    for path in reversed(chain):
        contents = dict_from_yaml(filepath=path)
        contents.pop(EXTENDS_KEY, None)
        result = deep_merged(result, contents)
    return result
