"""User directory container with simulated login."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pulseboard.shared.core import events
from pulseboard.shared.core.event_bus import EventBus
from pulseboard.shared.core.scheduler import ScheduledCall, Scheduler
from pulseboard.shared.domain import selectors
from pulseboard.shared.domain.models import (
    LoginResult,
    User,
    UserDraft,
    UserUpdate,
    avatar_url,
)
from pulseboard.shared.domain.seed import seed_users

from .base import StateContainer

logger = logging.getLogger(__name__)


class DirectoryState(StateContainer):
    """Users plus a reference to the currently logged-in one.

    Lookups that miss return None and actions on unknown ids are silent
    no-ops; nothing here raises for a missing user.

    Login checks the email only. The password is accepted and ignored.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        event_bus: Optional[EventBus] = None,
        login_delay: float = 1.0,
        clear_current_user_on_failed_login: bool = False,
        users: Optional[List[User]] = None,
    ) -> None:
        super().__init__(event_bus)
        self._scheduler = scheduler
        self._login_delay = login_delay
        self._clear_on_failed_login = clear_current_user_on_failed_login

        self.users: List[User] = list(users) if users is not None else seed_users()
        self.current_user: Optional[User] = None
        self.loading = False
        # Outcome of the last completed login, None until one completes
        self.login_result: Optional[LoginResult] = None

    # --- Derived ---

    def get_by_id(self, user_id: int) -> Optional[User]:
        return selectors.find_user(self.users, user_id)

    @property
    def active_users(self) -> List[User]:
        return selectors.active_users(self.users)

    @property
    def user_count(self) -> int:
        return len(self.users)

    # --- Actions ---

    def set_current_user(self, user: Optional[User]) -> None:
        """Replace the current user; membership in the directory is not checked."""
        self.current_user = user
        self._notify(
            events.TOPIC_DIRECTORY_CURRENT_USER,
            events.create_current_user_event(user.model_dump() if user else None),
        )

    def add_user(self, draft: UserDraft | Mapping[str, Any]) -> User:
        """Append a new user with the next id and a generated avatar.

        Args:
            draft: name, email, role and status of the new user

        Returns:
            The stored user
        """
        if not isinstance(draft, UserDraft):
            draft = UserDraft.model_validate(draft)

        new_id = selectors.next_user_id(self.users)
        user = User(id=new_id, avatar=avatar_url(new_id), **draft.model_dump())
        self.users.append(user)
        logger.debug(f"Added user {new_id} <{user.email}>")
        self._notify(
            events.TOPIC_DIRECTORY_USERS,
            events.create_users_changed_event("added", new_id, self.user_count),
        )
        return user

    def update_user(
        self,
        user_id: int,
        changes: UserUpdate | Mapping[str, Any],
    ) -> Optional[User]:
        """Replace the given fields of one user in place.

        Fields not present in ``changes`` keep their values. The id itself
        cannot be changed. An unknown id leaves the directory untouched.

        Returns:
            The updated user, or None if no user has that id
        """
        if not isinstance(changes, UserUpdate):
            changes = UserUpdate.model_validate(changes)

        for index, user in enumerate(self.users):
            if user.id == user_id:
                updated = user.model_copy(update=changes.changes())
                self.users[index] = updated
                self._notify(
                    events.TOPIC_DIRECTORY_USERS,
                    events.create_users_changed_event("updated", user_id, self.user_count),
                )
                return updated

        logger.debug(f"update_user: no user with id {user_id}")
        return None

    def delete_user(self, user_id: int) -> int:
        """Remove every user with ``user_id``.

        Returns:
            Number of users removed (0 or 1 while ids are unique)
        """
        remaining = [user for user in self.users if user.id != user_id]
        removed = len(self.users) - len(remaining)
        if not removed:
            logger.debug(f"delete_user: no user with id {user_id}")
            return 0

        self.users = remaining
        self._notify(
            events.TOPIC_DIRECTORY_USERS,
            events.create_users_changed_event("deleted", user_id, self.user_count),
        )
        return removed

    def login(self, email: str, password: str) -> ScheduledCall:
        """Simulate an authentication round trip.

        After the delay the user with exactly this email becomes the current
        user. On a miss the current user is kept as it was, unless the
        directory was built with ``clear_current_user_on_failed_login``.
        Either way ``login_result`` records the outcome and ``loading`` ends
        False. Overlapping logins are not sequenced; the last to complete wins.

        Returns:
            Handle of the scheduled completion

        Raises:
            RuntimeError: If the scheduler cannot schedule (AsyncioScheduler
                outside a running loop); ``loading`` is left unchanged
        """
        call = self._scheduler.call_later(
            self._login_delay,
            lambda: self._complete_login(email),
            name="directory.login",
        )
        self._set_loading(True)
        return call

    def _complete_login(self, email: str) -> None:
        user = selectors.find_user_by_email(self.users, email)
        if user is not None:
            self.login_result = LoginResult.SUCCESS
            self.set_current_user(user)
            logger.info(f"Login succeeded for {email}")
        else:
            self.login_result = LoginResult.NOT_FOUND
            logger.info(f"Login failed: no user with email {email}")
            if self._clear_on_failed_login and self.current_user is not None:
                self.set_current_user(None)

        self._notify(
            events.TOPIC_DIRECTORY_LOGIN,
            events.create_login_event(email, self.login_result.value),
        )
        self._set_loading(False)

    def logout(self) -> None:
        self.set_current_user(None)

    def _set_loading(self, loading: bool) -> None:
        self.loading = loading
        self._notify(events.TOPIC_DIRECTORY_LOADING, events.create_loading_event(loading))
