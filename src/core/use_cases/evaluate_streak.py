"""
Evaluate Streak Use Case - lazy backfill of days since the watermark.

AICODE-NOTE: Called synchronously from every read path (no scheduler).
All unevaluated days are folded in memory and committed once, together
with the new watermark. A crash mid-range therefore re-evaluates the whole
range on the next read instead of leaving a half-applied streak.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from tortoise.transactions import in_transaction

from src.core.domain.habit_rules import LedgerState, count_completed_categories
from src.core.domain.streak_rules import (
    DAY_SHIELDED,
    DayOutcome,
    StreakState,
    backfill_streak,
    days_to_evaluate,
)
from src.core.exceptions import UserNotFoundError
from src.services.user_locks import user_lock
from src.storage import daily_log_repo, habits_config_repo, user_repo

logger = logging.getLogger(__name__)


@dataclass
class StreakEvaluation:
    """Streak state after evaluation."""

    current_streak: int
    longest_streak: int
    streak_shields: int
    evaluated_through: date | None
    days: list[DayOutcome] = field(default_factory=list)

    @property
    def shields_used(self) -> int:
        return sum(1 for day in self.days if day.result == DAY_SHIELDED)

    @property
    def shields_earned(self) -> int:
        return sum(1 for day in self.days if day.shield_earned)


class EvaluateStreakUseCase:
    """Use-case for lazy streak evaluation."""

    async def execute(self, user_id: int, today: date) -> StreakEvaluation:
        """
        Evaluate every day from the watermark + 1 through today - 1.

        - No watermark yet: set it to today, streak untouched.
        - Watermark >= today: no-op.

        Raises:
            UserNotFoundError: if the user does not exist
        """
        async with user_lock(user_id):
            async with in_transaction() as connection:
                user = await user_repo.lock_user(user_id, connection)
                if user is None:
                    raise UserNotFoundError(user_id)

                state = StreakState(
                    current_streak=user.current_streak,
                    longest_streak=user.longest_streak,
                    streak_shields=user.streak_shields,
                )
                watermark = user.streak_last_evaluated_date

                if watermark is None:
                    user.streak_last_evaluated_date = today
                    await user_repo.save_fields(
                        user, ["streak_last_evaluated_date"], connection
                    )
                    logger.info(f"User {user_id} streak tracking started on {today}")
                    return self._evaluation(state, today)

                if watermark >= today:
                    logger.debug(f"User {user_id} streak already evaluated for {today}")
                    return self._evaluation(state, watermark)

                days = days_to_evaluate(watermark, today)
                completions = []
                if days:
                    goals = await habits_config_repo.get_goals(user_id, connection)
                    logs = await daily_log_repo.get_logs_between(
                        user_id, days[0], days[-1], connection
                    )
                    completions = [
                        (
                            day,
                            count_completed_categories(
                                LedgerState.from_log(logs.get(day)), goals
                            ),
                        )
                        for day in days
                    ]

                new_state, outcomes = backfill_streak(state, completions)

                user.current_streak = new_state.current_streak
                user.longest_streak = new_state.longest_streak
                user.streak_shields = new_state.streak_shields
                user.streak_last_evaluated_date = today
                await user_repo.save_fields(user, user_repo.STREAK_FIELDS, connection)

        evaluation = self._evaluation(new_state, today, outcomes)
        logger.info(
            f"User {user_id} streak evaluated for {len(outcomes)} day(s): "
            f"{state.current_streak} -> {new_state.current_streak} "
            f"(longest {new_state.longest_streak}, shields {new_state.streak_shields}, "
            f"used {evaluation.shields_used}, earned {evaluation.shields_earned})"
        )
        return evaluation

    @staticmethod
    def _evaluation(
        state: StreakState, through: date | None, days: list[DayOutcome] | None = None
    ) -> StreakEvaluation:
        return StreakEvaluation(
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            streak_shields=state.streak_shields,
            evaluated_through=through,
            days=days or [],
        )


evaluate_streak_use_case = EvaluateStreakUseCase()
