import pytest

from curiosity.runtime.history import ConversationHistory, Role, Turn


def test_system_turn_is_added_once():
    history = ConversationHistory()
    builds = []

    def build():
        builds.append(1)
        return "system text"

    assert history.ensure_system_turn(build) == Turn(Role.SYSTEM, "system text")
    history.append(Role.USER, "hi")
    assert history.ensure_system_turn(build) is None

    assert len(builds) == 1
    assert history.has_system_turn


def test_system_turn_must_come_first():
    history = ConversationHistory()
    history.append(Role.USER, "hi")
    with pytest.raises(ValueError):
        history.append(Role.SYSTEM, "late")


def test_messages_are_role_content_dicts_in_order():
    history = ConversationHistory()
    history.append(Role.SYSTEM, "s")
    history.append(Role.USER, "u")
    history.append(Role.TOOL, "t")
    history.append(Role.ASSISTANT, "a")

    assert history.to_messages() == [
        {"role": "system", "content": "s"},
        {"role": "user", "content": "u"},
        {"role": "tool", "content": "t"},
        {"role": "assistant", "content": "a"},
    ]
    assert [t.role for t in history] == [Role.SYSTEM, Role.USER, Role.TOOL, Role.ASSISTANT]
    assert history[-1].content == "a"


def test_turns_snapshot_is_immutable():
    history = ConversationHistory()
    history.append(Role.USER, "hi")
    snapshot = history.turns
    history.append(Role.ASSISTANT, "hello")

    assert len(snapshot) == 1
    assert len(history) == 2

    history.clear()
    assert len(history) == 0
    assert not history.has_system_turn
