"""Storage layer - thin CRUD repositories without business rules."""

from . import badge_repo, daily_log_repo, habits_config_repo, user_repo

__all__ = ["badge_repo", "daily_log_repo", "habits_config_repo", "user_repo"]
