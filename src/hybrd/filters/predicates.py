"""
Message filter predicates.

A Filter is a pure function over a MessageView returning a bool. Atomic
predicates never raise on odd content: anything they cannot read counts as
a non-match. Combine them with not_(), all_of() and any_of().

Example:
    from hybrd.filters import all_of, is_text, not_, from_self, starts_with

    accept = all_of(is_text, not_(from_self), starts_with("@bot"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from hybrd.core.exceptions import FilterEvaluationError
from hybrd.messaging.types import ContentType, InboundMessage, Reaction, Reply

if TYPE_CHECKING:
    from hybrd.core.protocols import Conversation, MessagingClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageView:
    """What a filter gets to look at."""

    message: InboundMessage
    conversation: "Conversation | None" = None
    client: "MessagingClient | None" = None


Filter = Callable[[MessageView], bool]


# --- Content helpers ---


def _reaction_fields(content: Any) -> tuple[str, str] | None:
    """Extract (emoji, action) from structured reaction content."""
    if isinstance(content, Reaction):
        return content.content, content.action
    if isinstance(content, dict):
        emoji = content.get("content")
        action = content.get("action")
        if isinstance(emoji, str) and isinstance(action, str):
            return emoji, action
    return None


def _text_of(message: InboundMessage) -> str:
    if isinstance(message.content, str):
        return message.content
    if isinstance(message.content, Reply) and isinstance(message.content.content, str):
        return message.content.content
    return ""


# --- Atomic predicates ---


def is_text(view: MessageView) -> bool:
    msg = view.message
    return msg.content_type == ContentType.TEXT and isinstance(msg.content, str)


def is_reply(view: MessageView) -> bool:
    msg = view.message
    return msg.content_type == ContentType.REPLY or isinstance(msg.content, Reply)


def is_text_reply(view: MessageView) -> bool:
    content = view.message.content
    return is_reply(view) and isinstance(content, Reply) and isinstance(
        content.content, str
    )


def is_remote_attachment(view: MessageView) -> bool:
    return view.message.content_type == ContentType.REMOTE_ATTACHMENT


def has_content(view: MessageView) -> bool:
    content = view.message.content
    return content is not None and content != ""


def is_group(view: MessageView) -> bool:
    return getattr(view.conversation, "is_group", None) is True


def is_dm(view: MessageView) -> bool:
    return getattr(view.conversation, "is_group", None) is False


def from_self(view: MessageView) -> bool:
    """True when the agent itself sent the message."""
    inbox_id = getattr(view.client, "inbox_id", None)
    sender = view.message.sender_inbox_id
    if not isinstance(inbox_id, str) or not isinstance(sender, str) or not inbox_id:
        return False
    return sender.lower() == inbox_id.lower()


def is_reaction(emoji: str | None = None, action: str | None = None) -> Filter:
    """
    Match reaction messages, optionally a specific emoji and/or action.

    With no arguments any reaction matches. With an emoji or action the
    reaction must carry structured content with both fields.
    """

    def predicate(view: MessageView) -> bool:
        msg = view.message
        if msg.content_type != ContentType.REACTION and not isinstance(
            msg.content, Reaction
        ):
            return False
        if emoji is None and action is None:
            return True
        fields = _reaction_fields(msg.content)
        if fields is None:
            return False
        got_emoji, got_action = fields
        if emoji is not None and got_emoji != emoji:
            return False
        if action is not None and got_action != action:
            return False
        return True

    return predicate


def has_mention(pattern: str) -> Filter:
    """Match messages whose text contains `pattern`."""

    def predicate(view: MessageView) -> bool:
        return pattern in _text_of(view.message)

    return predicate


def starts_with(prefix: str) -> Filter:
    """Match messages whose text starts with `prefix`."""

    def predicate(view: MessageView) -> bool:
        return _text_of(view.message).startswith(prefix)

    return predicate


# --- Combinators ---


def not_(predicate: Filter) -> Filter:
    def negated(view: MessageView) -> bool:
        return not predicate(view)

    return negated


def all_of(*predicates: Filter) -> Filter:
    """Logical AND. An empty group accepts everything."""

    def combined(view: MessageView) -> bool:
        return all(p(view) for p in predicates)

    return combined


def any_of(*predicates: Filter) -> Filter:
    """Logical OR. An empty group rejects everything."""

    def combined(view: MessageView) -> bool:
        return any(p(view) for p in predicates)

    return combined


def evaluate(predicate: Filter, view: MessageView) -> bool:
    """
    Evaluate a filter against a message.

    Raises:
        FilterEvaluationError: If the predicate raised instead of answering
    """
    try:
        return bool(predicate(view))
    except Exception as e:
        raise FilterEvaluationError(
            f"Filter raised for message {view.message.id}: {e}"
        ) from e
