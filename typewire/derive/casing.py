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

import re
from enum import Enum
from typing import assert_never


class CasingConvention(str, Enum):
    """ Conventions accepted by the `rename_all` container option.
    """
    LOWERCASE = 'lowercase'
    UPPERCASE = 'UPPERCASE'
    SNAKE_CASE = 'snake_case'
    SCREAMING_SNAKE_CASE = 'SCREAMING_SNAKE_CASE'
    KEBAB_CASE = 'kebab-case'
    CAMEL_CASE = 'camelCase'
    PASCAL_CASE = 'PascalCase'


# an acronym followed by a capitalized word, a (capitalized) word, an acronym, or a number
_WORD_RE = re.compile(r'[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*|[0-9]+')


def split_words(identifier: str) -> list[str]:
    """ Split an identifier in PascalCase, camelCase or snake_case into its words.

    >>> split_words('InventoryItem')
    ['Inventory', 'Item']
    >>> split_words('HTTPServer')
    ['HTTP', 'Server']
    >>> split_words('already_snake')
    ['already', 'snake']
    >>> split_words('SCREAMING_CASE')
    ['SCREAMING', 'CASE']
    >>> split_words('Two2')
    ['Two2']
    """
    return _WORD_RE.findall(identifier)


def rename_all(identifier: str, convention: CasingConvention) -> str:
    """ Apply a casing convention to a member identifier.

    >>> rename_all('FooBar', CasingConvention.LOWERCASE)
    'foobar'
    >>> rename_all('FooBar', CasingConvention.UPPERCASE)
    'FOOBAR'
    >>> rename_all('FooBar', CasingConvention.SNAKE_CASE)
    'foo_bar'
    >>> rename_all('FooBar', CasingConvention.SCREAMING_SNAKE_CASE)
    'FOO_BAR'
    >>> rename_all('FooBar', CasingConvention.KEBAB_CASE)
    'foo-bar'
    >>> rename_all('FooBar', CasingConvention.CAMEL_CASE)
    'fooBar'
    >>> rename_all('foo_bar', CasingConvention.PASCAL_CASE)
    'FooBar'
    """
    match convention:
        case CasingConvention.LOWERCASE:
            return identifier.lower()
        case CasingConvention.UPPERCASE:
            return identifier.upper()

    words = split_words(identifier)
    match convention:
        case CasingConvention.SNAKE_CASE:
            return '_'.join(word.lower() for word in words)
        case CasingConvention.SCREAMING_SNAKE_CASE:
            return '_'.join(word.upper() for word in words)
        case CasingConvention.KEBAB_CASE:
            return '-'.join(word.lower() for word in words)
        case CasingConvention.CAMEL_CASE:
            first, *rest = words or ['']
            return first.lower() + ''.join(word.capitalize() for word in rest)
        case CasingConvention.PASCAL_CASE:
            return ''.join(word.capitalize() for word in words)
    assert_never(convention)
