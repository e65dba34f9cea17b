"""dnstag - DNS label compatible tags and tag unions

This package provides the Tag type, an RFC 1035 DNS label compatible
identifier, and the TagUnion type, a set of tags that must all be present
for a selection to match.
"""

from .tag import (
    Tag,
    TagError,
    MustStartAlphabeticError,
    MustEndAlphanumericError,
    InvalidCharacterError,
    LimitExceededError,
)
from .tag_union import (
    TagUnion,
    UnionMatcher,
    TagUnionError,
    InvalidTagError,
)

__version__ = "0.1.0"

__all__ = [
    "Tag",
    "TagError",
    "MustStartAlphabeticError",
    "MustEndAlphanumericError",
    "InvalidCharacterError",
    "LimitExceededError",
    "TagUnion",
    "UnionMatcher",
    "TagUnionError",
    "InvalidTagError",
]
