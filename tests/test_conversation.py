from osrs_oracle.domain.models import Message, Role
from osrs_oracle.services.conversation import to_history, to_wire


def test_history_has_one_turn_per_message_in_order():
    messages = [
        Message(role=Role.ASSISTANT, text="Welcome"),
        Message(role=Role.USER, text="Best whip?"),
        Message(role=Role.ASSISTANT, text="The [[Abyssal whip|Slash: +82]]"),
    ]
    turns = to_history(messages)
    assert len(turns) == 3
    assert [t.role for t in turns] == ["model", "user", "model"]
    assert turns[2].parts == ("The [[Abyssal whip|Slash: +82]]",)


def test_to_wire_shape():
    turns = to_history([Message(role=Role.USER, text="hi")])
    assert to_wire(turns) == [{"role": "user", "parts": [{"text": "hi"}]}]


def test_empty_log():
    assert to_history([]) == []
