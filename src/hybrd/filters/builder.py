"""Callback-style filter builder."""

from __future__ import annotations

from typing import Callable

from hybrd.filters import predicates as p
from hybrd.filters.predicates import Filter, MessageView


class FilterAPI:
    """
    Named predicate helpers bound to one message.

    Passed to filter callbacks:
        filter_messages(lambda f: f.is_text() and not f.from_self())
    """

    def __init__(self, view: MessageView):
        self._view = view

    def from_self(self) -> bool:
        return p.from_self(self._view)

    def has_content(self) -> bool:
        return p.has_content(self._view)

    def is_dm(self) -> bool:
        return p.is_dm(self._view)

    def is_group(self) -> bool:
        return p.is_group(self._view)

    def is_text(self) -> bool:
        return p.is_text(self._view)

    def is_reply(self) -> bool:
        return p.is_reply(self._view)

    def is_text_reply(self) -> bool:
        return p.is_text_reply(self._view)

    def is_remote_attachment(self) -> bool:
        return p.is_remote_attachment(self._view)

    def is_reaction(self, emoji: str | None = None, action: str | None = None) -> bool:
        return p.is_reaction(emoji, action)(self._view)

    def has_mention(self, mention: str) -> bool:
        return p.has_mention(mention)(self._view)

    def starts_with(self, prefix: str) -> bool:
        return p.starts_with(prefix)(self._view)


FilterCallback = Callable[[FilterAPI], bool]


def build_filter(callback: FilterCallback) -> Filter:
    """Turn a FilterAPI callback into a Filter."""

    def predicate(view: MessageView) -> bool:
        return bool(callback(FilterAPI(view)))

    return predicate
