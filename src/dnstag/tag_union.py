"""Tag Unions

A tag union is a set of tags that must all be present, written as
`foo` or `foo+bar+baz` (i.e. `foo` and `bar` and `baz`). A sequence of
unions selects a set of tags if any one of its unions does.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional

from .tag import Tag, TagError

logger = logging.getLogger(__name__)


class TagUnionError(ValueError):
    """Base exception for tag union errors"""
    pass


class InvalidTagError(TagUnionError):
    """A part of the union is not a valid tag"""
    def __init__(self, tag_error: TagError):
        self.tag_error = tag_error
        super().__init__(f"Invalid tag: {tag_error}")


class TagUnion:
    """A set of tags that are required together

    Examples:
    - `foo`
    - `foo+bar`
    - `linux+x86-64+gpu`
    """

    DELIMITER = '+'

    def __init__(self, tags: Optional[Iterable[Tag]] = None):
        """Create a tag union from already validated tags"""
        self._tags = set(tags) if tags is not None else set()

    @classmethod
    def empty(cls) -> 'TagUnion':
        """Create an empty tag union, which matches any set of tags"""
        return cls()

    @classmethod
    def from_string(cls, s: str) -> 'TagUnion':
        """Create a tag union from a string representation

        Format: `tag1+tag2+...`
        Empty parts are ignored, so `foo+++bar+` equals `foo+bar`
        Duplicate tags are collapsed
        An input without any tag (e.g. `` or `+++`) is the empty union
        The first invalid tag fails the whole union
        """
        if not s:
            return cls()

        names = [part for part in s.split(cls.DELIMITER) if cls.DELIMITER not in part]
        names = [part for part in names if part]
        # Dedupe, first occurrence wins
        names = list(dict.fromkeys(names))

        if not names:
            return cls()

        tags = []
        for name in names:
            try:
                tags.append(Tag.from_string(name))
            except TagError as e:
                logger.debug("Rejected tag union '%s': %s", s, e)
                raise InvalidTagError(e) from e

        return cls(tags)

    @staticmethod
    def canonical(s: str) -> str:
        """Get the canonical form of a tag union string"""
        return TagUnion.from_string(s).to_string()

    def insert(self, tag: Tag) -> bool:
        """Insert a tag

        Returns True if the tag was not yet part of the union
        """
        if tag in self._tags:
            return False
        self._tags.add(tag)
        return True

    def remove(self, tag: Tag) -> bool:
        """Remove a tag

        Returns True if the tag was part of the union
        """
        if tag not in self._tags:
            return False
        self._tags.remove(tag)
        return True

    def contains(self, tag: Tag) -> bool:
        """Check if the tag is part of the union"""
        return tag in self._tags

    def is_empty(self) -> bool:
        return not self._tags

    def matches_set(self, values: Iterable[Tag]) -> bool:
        """Check if every tag of this union is present in the given tags

        The empty union matches anything, including no tags at all.
        """
        return self._tags.issubset(values)

    def to_string(self) -> str:
        """Get the canonical string representation of this union

        Tags are sorted alphabetically and joined with `+`
        """
        return self.DELIMITER.join(str(tag) for tag in sorted(self._tags))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"TagUnion('{self.to_string()}')"

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(sorted(self._tags))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagUnion):
            return False
        return self._tags == other._tags

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._tags)))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        """Validate from strings through `from_string`, serialize canonically"""
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


class UnionMatcher:
    """Selection over sequences of tag unions (any union may match)"""

    @staticmethod
    def matches_set(unions: Iterable[TagUnion], values: Iterable[Tag]) -> bool:
        """Check if any of the unions matches the given tags

        An empty sequence of unions matches nothing.
        """
        values = values if isinstance(values, (set, frozenset)) else set(values)
        return any(union.matches_set(values) for union in unions)

    @staticmethod
    def find_first_match(unions: Iterable[TagUnion], values: Iterable[Tag]) -> Optional[TagUnion]:
        """Find the first union that matches the given tags"""
        values = values if isinstance(values, (set, frozenset)) else set(values)
        for union in unions:
            if union.matches_set(values):
                return union
        return None

    @staticmethod
    def find_all_matches(unions: Iterable[TagUnion], values: Iterable[Tag]) -> List[TagUnion]:
        """Find all unions that match the given tags, in sequence order"""
        values = values if isinstance(values, (set, frozenset)) else set(values)
        return [union for union in unions if union.matches_set(values)]

    @staticmethod
    def parse_all(unions: Iterable[str]) -> List[TagUnion]:
        """Parse a sequence of tag union strings

        The first invalid string fails the whole sequence
        """
        return [TagUnion.from_string(s) for s in unions]
