"""Progression engine exceptions."""


class ProgressionError(Exception):
    """Base class for progression engine errors."""


class UserNotFoundError(ProgressionError, LookupError):
    """The user row does not exist."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id
