"""DNS Label Compatible Tags

This module provides the Tag type, a short identifier restricted to an
RFC 1035 DNS label compatible grammar:

- not longer than 63 characters,
- only lowercase alphanumeric characters or '-',
- starts with a lowercase alphabetic character, and
- ends with a lowercase alphanumeric character.

The empty string is accepted as the distinguished empty tag.
"""

from functools import total_ordering
from typing import Any


# Error classes
class TagError(ValueError):
    """Base exception for tag grammar violations"""
    pass


class MustStartAlphabeticError(TagError):
    """First character is not a lowercase letter"""
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Tag name must begin with a lowercase alphabetic character, got '{char}'")


class MustEndAlphanumericError(TagError):
    """Last character is not a lowercase letter or digit"""
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Tag name must end with a lowercase alphanumeric character, got '{char}'")


class InvalidCharacterError(TagError):
    """Character outside of [a-z0-9-]"""
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Tag name must only contain lowercase alphanumeric characters or '-', got '{char}'")


class LimitExceededError(TagError):
    """Tag is longer than Tag.MAX_LEN"""
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Tag name must be not longer than {Tag.MAX_LEN} characters, got '{length}'")


@total_ordering
class Tag:
    """A validated tag name

    Examples:
    - `foo`
    - `some-tag`
    - `x86-64`
    """

    MAX_LEN = 63
    EMPTY: 'Tag'

    __slots__ = ('_value',)

    def __init__(self, value: Any):
        """Create a tag from input known to be valid

        Raises a TagError if the input is not a valid tag; use
        `Tag.from_string` where the input comes from outside.
        """
        self._value = self._validate(str(value))

    @classmethod
    def from_string(cls, s: str) -> 'Tag':
        """Parse a tag from a string

        Rules are checked in a fixed order and only the first violation
        is reported: length, first character, every character, last
        character. The empty string yields `Tag.EMPTY`.
        """
        if not s:
            return cls.EMPTY
        return cls.new_unchecked(cls._validate(s))

    @classmethod
    def new_unchecked(cls, value: str) -> 'Tag':
        """Create a tag without validating it

        The caller is responsible for passing a valid tag name.
        """
        tag = cls.__new__(cls)
        tag._value = value
        return tag

    @classmethod
    def is_valid(cls, s: str) -> bool:
        """Check whether a string is a valid tag name"""
        try:
            cls.from_string(s)
        except TagError:
            return False
        return True

    @staticmethod
    def _validate(s: str) -> str:
        if not s:
            return s

        if len(s) > Tag.MAX_LEN:
            raise LimitExceededError(len(s))

        first = s[0]
        if not Tag._is_ascii_lowercase(first):
            raise MustStartAlphabeticError(first)

        last = first
        for c in s[1:]:
            if not (Tag._is_ascii_lowercase(c) or Tag._is_ascii_digit(c) or c == '-'):
                raise InvalidCharacterError(c)
            last = c

        if not (Tag._is_ascii_lowercase(last) or Tag._is_ascii_digit(last)):
            raise MustEndAlphanumericError(last)

        return s

    @staticmethod
    def _is_ascii_lowercase(c: str) -> bool:
        return 'a' <= c <= 'z'

    @staticmethod
    def _is_ascii_digit(c: str) -> bool:
        return '0' <= c <= '9'

    @property
    def value(self) -> str:
        """The tag name"""
        return self._value

    def to_string(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Tag('{self._value}')"

    def __len__(self) -> int:
        return len(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, '_value'):
            raise AttributeError("Tag is immutable")
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        # Plain strings compare by text
        if isinstance(other, Tag):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Tag):
            return self._value < other._value
        if isinstance(other, str):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        # Same hash as the text so tags and strings share set lookups
        return hash(self._value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        """Validate from strings through `from_string`, serialize as bare text"""
        from pydantic_core import core_schema

        from_str = core_schema.no_info_after_validator_function(
            cls.from_string, core_schema.str_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_str]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


Tag.EMPTY = Tag.new_unchecked('')
