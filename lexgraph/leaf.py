"""Leaf nodes: terminal states of the lexer graph that produce a token."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class CallbackKind(Enum):
    """The kind of work a leaf does when it is reached."""

    LABEL = "label"
    INLINE = "inline"
    SKIP = "skip"


@dataclass(frozen=True)
class Callback:
    """A callback attached to a leaf.

    For ``LABEL`` the body is the name of the function to call; for ``INLINE``
    ``arg`` and ``body`` describe a closure; ``SKIP`` discards the match.
    """

    kind: CallbackKind
    body: str = ""
    arg: str = ""
    span: Any = None


@dataclass(frozen=True, repr=False)
class Leaf:
    """A token definition reached at the end of a match.

    ``ident`` is the variant name, or None for a skip rule. ``field`` is the
    type name carried by the variant, or None when it carries nothing.
    Leaves order by priority, which is how ambiguous merges are settled.
    """

    ident: str | None
    span: Any = None
    priority: int = 0
    field: str | None = None
    callback: Callback | None = None

    @classmethod
    def new_skip(cls, span: Any) -> Leaf:
        """A leaf that discards whatever it matches."""
        return cls(None, span, callback=Callback(CallbackKind.SKIP, span=span))

    def with_callback(self, callback: Callback | None) -> Leaf:
        return replace(self, callback=callback)

    def with_field(self, field: str | None) -> Leaf:
        return replace(self, field=field)

    def with_priority(self, priority: int) -> Leaf:
        return replace(self, priority=priority)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Leaf):
            return NotImplemented
        return self.priority < other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Leaf):
            return NotImplemented
        return self.priority > other.priority

    def __str__(self) -> str:
        return self.ident if self.ident is not None else "<skip>"

    def __repr__(self) -> str:
        text = f"::{self}"
        if self.callback is None:
            return text
        if self.callback.kind is CallbackKind.LABEL:
            return f"{text} ({self.callback.body})"
        if self.callback.kind is CallbackKind.INLINE:
            return f"{text} (<inline>)"
        return f"{text} (<skip>)"