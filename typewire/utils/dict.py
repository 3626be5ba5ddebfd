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

from collections.abc import Mapping
from typing import Any


def deep_merged(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Returns a new dict with the values of `override` over the ones of `base`, nested dicts are merged as well.

    >>> base = dict(a=1, b=dict(c=2, d=3), e=dict(f=4))
    >>> deep_merged(base, dict(b=dict(d=5, e=6), e=7)) == dict(a=1, b=dict(c=2, d=5, e=6), e=7)
    True
    >>> base['b']
    {'c': 2, 'd': 3}
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merged(current, value)
        else:
            result[key] = value
    return result
