import pytest
from pydantic import ValidationError

from pulseboard.shared.core import events
from pulseboard.shared.core.event_bus import EventBus
from pulseboard.shared.core.scheduler import VirtualScheduler
from pulseboard.shared.domain.models import LoginResult, User, UserDraft, UserUpdate
from pulseboard.state import DirectoryState


@pytest.fixture
def directory(scheduler: VirtualScheduler) -> DirectoryState:
    return DirectoryState(scheduler)


def snapshot(directory: DirectoryState) -> list[User]:
    return [user.model_copy() for user in directory.users]


def test_get_by_id(directory: DirectoryState) -> None:
    user = directory.get_by_id(3)
    assert user is not None
    assert user.email == "jane@example.com"
    assert directory.get_by_id(99) is None


def test_active_users_and_count(directory: DirectoryState) -> None:
    assert [u.id for u in directory.active_users] == [1, 2, 3, 5]
    assert directory.user_count == 5

    directory.update_user(4, {"status": True})
    assert [u.id for u in directory.active_users] == [1, 2, 3, 4, 5]
    assert directory.user_count == 5


def test_set_current_user_is_unchecked(directory: DirectoryState) -> None:
    """Test any user, even one outside the directory, can become current."""
    outsider = User(id=42, name="Ghost", email="ghost@x.com", role="Guest", status=False)
    directory.set_current_user(outsider)
    assert directory.current_user is outsider

    directory.set_current_user(None)
    assert directory.current_user is None


def test_add_user_assigns_next_id(directory: DirectoryState) -> None:
    user = directory.add_user(UserDraft(name="X", email="x@x.com", role="User", status=True))
    assert user.id == 6
    assert user.avatar == "https://api.dicebear.com/7.x/avataaars/svg?seed=6"
    assert directory.users[-1] == user
    assert directory.user_count == 6


def test_add_user_on_empty_directory(scheduler: VirtualScheduler) -> None:
    directory = DirectoryState(scheduler, users=[])
    user = directory.add_user({"name": "First", "email": "first@x.com", "role": "Admin", "status": True})
    assert user.id == 1
    assert user.avatar.endswith("seed=1")


def test_add_user_does_not_reuse_deleted_id(directory: DirectoryState) -> None:
    """Test ids come from the current maximum, so a deleted id is not reused."""
    directory.delete_user(3)
    user = directory.add_user({"name": "X", "email": "x@x.com", "role": "User", "status": True})
    assert user.id == 6
    assert user.avatar == "https://api.dicebear.com/7.x/avataaars/svg?seed=6"
    assert [u.id for u in directory.users] == [1, 2, 4, 5, 6]


def test_add_user_after_deleting_max_id(directory: DirectoryState) -> None:
    directory.delete_user(5)
    assert directory.add_user({"name": "Y", "email": "y@x.com", "role": "User", "status": False}).id == 5


def test_add_user_rejects_id(directory: DirectoryState) -> None:
    with pytest.raises(ValidationError):
        directory.add_user({"id": 100, "name": "X", "email": "x@x.com", "role": "User", "status": True})


def test_add_user_requires_status(directory: DirectoryState) -> None:
    with pytest.raises(ValidationError):
        directory.add_user({"name": "X", "email": "x@x.com", "role": "User"})
    assert directory.user_count == 5



def test_update_user_changes_only_given_fields(directory: DirectoryState) -> None:
    before = directory.get_by_id(2)
    updated = directory.update_user(2, {"role": "Admin"})

    assert updated is not None
    assert directory.users[1] is updated
    assert updated.role == "Admin"
    assert updated.model_dump(exclude={"role"}) == before.model_dump(exclude={"role"})


def test_update_user_with_model(directory: DirectoryState) -> None:
    updated = directory.update_user(4, UserUpdate(name="Robert Johnson", status=True))
    assert updated.name == "Robert Johnson"
    assert updated.status is True
    assert updated.email == "bob@example.com"


def test_update_user_unknown_id_is_noop(directory: DirectoryState) -> None:
    before = snapshot(directory)
    assert directory.update_user(99, {"name": "Nobody"}) is None
    assert directory.users == before


def test_update_user_cannot_change_id(directory: DirectoryState) -> None:
    with pytest.raises(ValidationError):
        directory.update_user(1, {"id": 7})


def test_delete_user(directory: DirectoryState) -> None:
    assert directory.delete_user(3) == 1
    assert directory.user_count == 4
    assert directory.get_by_id(3) is None


def test_delete_user_unknown_id_is_noop(directory: DirectoryState) -> None:
    before = snapshot(directory)
    assert directory.delete_user(99) == 0
    assert directory.users == before


def test_login_matches_email_ignoring_password(
    directory: DirectoryState, scheduler: VirtualScheduler
) -> None:
    directory.login("jane@example.com", "anything")
    assert directory.loading is True
    assert directory.current_user is None

    scheduler.advance(1.0)
    assert directory.loading is False
    assert directory.current_user is not None
    assert directory.current_user.email == "jane@example.com"
    assert directory.login_result == LoginResult.SUCCESS


def test_login_miss_keeps_current_user(
    directory: DirectoryState, scheduler: VirtualScheduler
) -> None:
    """Test a failed login leaves the previous current user in place."""
    admin = directory.get_by_id(1)
    directory.set_current_user(admin)

    directory.login("nobody@x.com", "x")
    scheduler.advance(1.0)

    assert directory.current_user is admin
    assert directory.login_result == LoginResult.NOT_FOUND
    assert directory.loading is False


def test_login_miss_can_clear_current_user(scheduler: VirtualScheduler) -> None:
    directory = DirectoryState(scheduler, clear_current_user_on_failed_login=True)
    directory.set_current_user(directory.get_by_id(1))

    directory.login("nobody@x.com", "x")
    scheduler.advance(1.0)

    assert directory.current_user is None
    assert directory.login_result == LoginResult.NOT_FOUND


def test_login_email_match_is_exact(directory: DirectoryState, scheduler: VirtualScheduler) -> None:
    directory.login("JANE@example.com", "pw")
    scheduler.advance(1.0)
    assert directory.current_user is None
    assert directory.login_result == LoginResult.NOT_FOUND


def test_login_result_is_unset_until_completion(
    directory: DirectoryState, scheduler: VirtualScheduler
) -> None:
    directory.login("jane@example.com", "pw")
    assert directory.login_result is None
    scheduler.advance(1.0)
    assert directory.login_result == LoginResult.SUCCESS


def test_overlapping_logins_last_completion_wins(
    directory: DirectoryState, scheduler: VirtualScheduler
) -> None:
    directory.login("jane@example.com", "pw")
    scheduler.advance(0.5)
    directory.login("bob@example.com", "pw")

    scheduler.advance(0.5)
    assert directory.current_user.email == "jane@example.com"

    scheduler.advance(0.5)
    assert directory.current_user.email == "bob@example.com"
    assert directory.loading is False


def test_logout(directory: DirectoryState, scheduler: VirtualScheduler) -> None:
    directory.login("admin@example.com", "pw")
    scheduler.advance(1.0)
    assert directory.current_user is not None

    directory.logout()
    assert directory.current_user is None


@pytest.mark.asyncio
async def test_login_publishes_events(scheduler: VirtualScheduler, bus: EventBus, recorder) -> None:
    directory = DirectoryState(scheduler, event_bus=bus)
    await bus.subscribe(events.TOPIC_DIRECTORY_LOADING, recorder)
    await bus.subscribe(events.TOPIC_DIRECTORY_CURRENT_USER, recorder)
    await bus.subscribe(events.TOPIC_DIRECTORY_LOGIN, recorder)

    directory.login("john@example.com", "pw")
    scheduler.advance(1.0)
    await bus.wait_until_idle()

    assert recorder.payloads[0] == {"loading": True}
    assert recorder.payloads[1]["user"]["email"] == "john@example.com"
    assert recorder.payloads[2] == {"email": "john@example.com", "result": "success"}
    assert recorder.payloads[3] == {"loading": False}


@pytest.mark.asyncio
async def test_directory_changes_publish_events(
    scheduler: VirtualScheduler, bus: EventBus, recorder
) -> None:
    directory = DirectoryState(scheduler, event_bus=bus)
    await bus.subscribe(events.TOPIC_DIRECTORY_USERS, recorder)

    directory.add_user({"name": "X", "email": "x@x.com", "role": "User", "status": True})
    directory.update_user(6, {"role": "Manager"})
    directory.delete_user(6)
    directory.delete_user(6)
    await bus.wait_until_idle()

    assert recorder.payloads == [
        {"action": "added", "user_id": 6, "user_count": 6},
        {"action": "updated", "user_id": 6, "user_count": 6},
        {"action": "deleted", "user_id": 6, "user_count": 5},
    ]
