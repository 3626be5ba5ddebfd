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


class TypewireError(Exception):
    """Base class for exceptions in typewire."""
    pass


class ShapeError(TypewireError):
    """ Raised when encode generation for a type cannot proceed.

    It always identifies the type being derived and the rule that was violated, and when the problem comes from a
    specific option also the attribute (`rename`, `repr`, ...) and the member it is attached to.
    """

    def __init__(
        self,
        type_name: str,
        rule: str,
        *,
        attribute: str | None = None,
        member: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.rule = rule
        self.attribute = attribute
        self.member = member
        super().__init__(self._format())

    def _format(self) -> str:
        location = self.type_name
        if self.member is not None:
            location = f'{location}.{self.member}'
        if self.attribute is not None:
            return f'{location}: attribute `{self.attribute}`: {self.rule}'
        return f'{location}: {self.rule}'


class UnsupportedShapeError(ShapeError):
    """Raised for unions, zero or multi-field unnamed aggregates and unit types."""
    pass


class InvalidAttributeCombinationError(ShapeError):
    """Raised when an attribute is not allowed for the shape of the type it is attached to."""
    pass


class UnknownAttributeError(ShapeError):
    """Raised for options that are not part of the metadata grammar."""
    pass


class InvalidAttributeValueError(ShapeError):
    """Raised when an option has a value it cannot take, like an unknown casing convention."""
    pass


class UnresolvedMemberEncodingError(TypewireError):
    """ Raised when a type has no encode contract for a backend.

    When it happens while generating a contract for a derived type, the type being derived fails generation as well.
    """

    def __init__(self, type_: object, backend_name: str, *, reason: str | None = None) -> None:
        self.type_ = type_
        self.backend_name = backend_name
        message = f'type {_pretty(type_)} does not implement encode for backend {backend_name}'
        if reason is not None:
            message = f'{message}: {reason}'
        super().__init__(message)


class UnknownBackendError(TypewireError):
    pass


def _pretty(type_: object) -> str:
    if isinstance(type_, type):
        return type_.__qualname__
    return getattr(type_, '__name__', None) or str(type_)
