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
from typing import Union

from pydantic import field_validator

from typewire.utils.pydantic import BaseModel

KNOWN_BACKENDS = ('postgres', 'mysql')


class TypewireSettings(BaseModel):
    # Backends for which contracts are generated as soon as a type is derived, so that failures show up at
    # class-definition time. Contracts for other backends are generated when first requested.
    ENABLED_BACKENDS: list[str] = list(KNOWN_BACKENDS)

    # Backend used when a caller does not name one.
    DEFAULT_BACKEND: str = 'postgres'

    @field_validator('ENABLED_BACKENDS')
    @classmethod
    def _validate_enabled_backends(cls, value: list[str]) -> list[str]:
        for name in value:
            if name not in KNOWN_BACKENDS:
                raise ValueError(f'unknown backend: {name}')
        if len(set(value)) != len(value):
            raise ValueError('backends cannot be repeated')
        return value

    @field_validator('DEFAULT_BACKEND')
    @classmethod
    def _validate_default_backend(cls, value: str) -> str:
        if value not in KNOWN_BACKENDS:
            raise ValueError(f'unknown backend: {value}')
        return value

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'TypewireSettings':
        """Takes a filepath to a yaml file and returns a validated TypewireSettings instance."""
        from typewire.utils.yaml import dict_from_extended_yaml
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
