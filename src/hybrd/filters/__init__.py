"""Message filter predicates and combinators."""

from hybrd.filters.builder import FilterAPI, FilterCallback, build_filter
from hybrd.filters.predicates import (
    Filter,
    MessageView,
    all_of,
    any_of,
    evaluate,
    from_self,
    has_content,
    has_mention,
    is_dm,
    is_group,
    is_reaction,
    is_remote_attachment,
    is_reply,
    is_text,
    is_text_reply,
    not_,
    starts_with,
)

__all__ = [
    "Filter",
    "FilterAPI",
    "FilterCallback",
    "MessageView",
    "all_of",
    "any_of",
    "build_filter",
    "evaluate",
    "from_self",
    "has_content",
    "has_mention",
    "is_dm",
    "is_group",
    "is_reaction",
    "is_remote_attachment",
    "is_reply",
    "is_text",
    "is_text_reply",
    "not_",
    "starts_with",
]
