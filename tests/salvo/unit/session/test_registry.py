import pytest

from salvo.game.ai.random_target import RandomTargetStrategy
from salvo.game.core.errors import ParticipantBusyError, SessionNotFoundError
from salvo.game.session.participants import Automated, Human
from salvo.game.session.registry import LookupEntry, SessionRegistry


def _bot(name: str = "bot") -> Automated:
    return Automated(name, RandomTargetStrategy)


def test_create_assigns_sequential_ids_and_indexes_humans() -> None:
    registry = SessionRegistry()
    first = registry.create(Human("alice"), Human("bob"))
    second = registry.create(Human("carol"), _bot())

    assert first.session_id == "g-1"
    assert second.session_id == "g-2"
    assert [p.participant_id for p in second.participants] == ["g-2-p-1", "g-2-p-2"]
    assert registry.lookup("bob") == LookupEntry("g-1", "g-1-p-2")
    assert registry.is_busy("carol")
    assert not registry.is_busy("bot")
    assert len(registry) == 2
    assert "g-2" in registry
    assert [s.session_id for s in registry] == ["g-1", "g-2"]


def test_busy_human_cannot_join_a_second_session() -> None:
    registry = SessionRegistry()
    registry.create(Human("alice"), _bot())

    with pytest.raises(ParticipantBusyError):
        registry.create(Human("bob"), Human("alice"))
    with pytest.raises(ParticipantBusyError):
        registry.create(Human("dave"), Human("dave"))
    assert len(registry) == 1


def test_bots_may_share_a_name_across_sessions() -> None:
    registry = SessionRegistry()
    registry.create(Human("alice"), _bot())
    registry.create(Human("bob"), _bot())
    registry.create(_bot(), _bot())
    assert len(registry) == 3


def test_get_find_and_remove() -> None:
    registry = SessionRegistry(board_size=8)
    session = registry.create(Human("alice"), Human("bob"))

    assert registry.get("g-1") is session
    assert session.participants[0].fired.size == 8
    with pytest.raises(SessionNotFoundError):
        registry.get("g-404")
    assert registry.find("g-404") is None

    assert registry.remove("g-1") is session
    assert registry.remove("g-1") is None
    assert not registry.is_busy("alice")
    assert registry.find("g-1") is None


def test_remove_keeps_newer_lookup_entries() -> None:
    registry = SessionRegistry()
    registry.create(Human("alice"), Human("bob"))
    registry.remove("g-1")
    registry.create(Human("alice"), _bot())

    registry.remove("g-1")
    assert registry.lookup("alice") == LookupEntry("g-2", "g-2-p-1")
    registry.forget("alice")
    assert not registry.is_busy("alice")
