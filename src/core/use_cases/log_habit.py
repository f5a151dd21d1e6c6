"""
Log Habit Use Case - one category update for "today".

AICODE-NOTE: The use-case only binds the input to its pure rule; the
ledger/XP commit is shared by all categories (progression.commit_ledger_update).
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from src.core.domain.habit_rules import GoalConfig, HabitInput, evaluate_habit
from src.core.use_cases.evolve_mascot import EvolutionResult
from src.core.use_cases.progression import LedgerCommit, LevelChange, commit_ledger_update
from src.database.models import DailyLog


@dataclass
class HabitUpdateResult:
    """Result of a habit update."""

    category: str
    xp_awarded: int
    xp_total: int
    level: int
    daily_log: DailyLog
    goals: GoalConfig
    level_up: LevelChange | None = None
    evolution: EvolutionResult | None = None

    @classmethod
    def from_commit(cls, commit: LedgerCommit) -> "HabitUpdateResult":
        return cls(
            category=commit.outcome.category,
            xp_awarded=commit.xp_awarded,
            xp_total=commit.user.xp_total,
            level=commit.user.level,
            daily_log=commit.daily_log,
            goals=commit.goals,
            level_up=commit.level_change if commit.level_change.leveled_up else None,
            evolution=commit.evolution,
        )


class LogHabitUseCase:
    """Use-case for updating one habit category."""

    async def execute(
        self,
        user_id: int,
        data: HabitInput,
        today: date,
        now: datetime | None = None,
    ) -> HabitUpdateResult:
        """
        Update one category in today's ledger.

        Args:
            user_id: User ID
            data: Validated category input
            today: The user's local calendar date
            now: Current instant (for tests, defaults to utcnow)

        Returns:
            HabitUpdateResult with XP awarded and the new totals
        """
        now = now or datetime.now(timezone.utc)

        commit = await commit_ledger_update(
            user_id,
            today,
            lambda ledger, goals: evaluate_habit(ledger, data, goals, now),
        )
        return HabitUpdateResult.from_commit(commit)


log_habit_use_case = LogHabitUseCase()
