"""Turn the in-memory message log into request history."""

from __future__ import annotations

from typing import Iterable, List

from osrs_oracle.domain.models import ConversationTurn, Message


def to_history(messages: Iterable[Message]) -> List[ConversationTurn]:
    # Markup is sent verbatim; parsing only happens at render time.
    return [ConversationTurn(role=m.role.wire_name, parts=(m.text,)) for m in messages]


def to_wire(turns: Iterable[ConversationTurn]) -> List[dict]:
    return [turn.to_wire() for turn in turns]


__all__ = ["to_history", "to_wire"]
