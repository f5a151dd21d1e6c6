"""
Progression Use Case - the single write path for XP, level and ledger flags.

AICODE-NOTE: Every habit update goes through commit_ledger_update(). It reads
the day's ledger and the user inside one transaction (rows locked), lets a pure
rule compute raw XP + field writes, clamps XP against the daily cap and commits
ledger, user XP/level and any mascot evolution together. Any failure rolls the
whole unit back.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from tortoise.transactions import in_transaction

from src.core.domain.gamification import cap_daily_xp, level_for_xp
from src.core.domain.habit_rules import GoalConfig, LedgerState, RuleOutcome
from src.core.exceptions import UserNotFoundError
from src.core.use_cases.evolve_mascot import EvolutionResult, check_and_apply_evolution
from src.database.models import DailyLog, User
from src.services.user_locks import user_lock
from src.storage import daily_log_repo, habits_config_repo, user_repo

logger = logging.getLogger(__name__)

RuleBuilder = Callable[[LedgerState, GoalConfig], RuleOutcome]


@dataclass
class LevelChange:
    previous_level: int
    new_level: int
    leveled_up: bool


@dataclass
class LedgerCommit:
    """Result of one committed ledger update."""

    outcome: RuleOutcome
    xp_awarded: int
    user: User
    daily_log: DailyLog
    goals: GoalConfig
    level_change: LevelChange
    evolution: EvolutionResult | None = None


def apply_xp(user: User, applied_delta: int) -> LevelChange:
    """
    Add already-capped XP to the user and recompute the cached level.

    No-op for applied_delta <= 0. Only mutates the instance; the caller
    persists it in its transaction.
    """
    previous_level = user.level
    if applied_delta <= 0:
        return LevelChange(previous_level, previous_level, False)

    user.xp_total += applied_delta
    user.level = level_for_xp(user.xp_total)
    return LevelChange(previous_level, user.level, user.level > previous_level)


async def commit_ledger_update(
    user_id: int, log_date: date, build_outcome: RuleBuilder
) -> LedgerCommit:
    """
    Apply one category update to the user's ledger for log_date.

    Raises:
        UserNotFoundError: if the user does not exist
    """
    async with user_lock(user_id):
        async with in_transaction() as connection:
            user = await user_repo.lock_user(user_id, connection)
            if user is None:
                raise UserNotFoundError(user_id)

            goals = await habits_config_repo.get_goals(user_id, connection)
            log = await daily_log_repo.lock_daily_log(user_id, log_date, connection)
            ledger = LedgerState.from_log(log)

            outcome = build_outcome(ledger, goals)
            xp_awarded = cap_daily_xp(ledger.xp_earned, outcome.raw_xp)

            writes = dict(outcome.writes)
            if xp_awarded > 0:
                writes["xp_earned"] = ledger.xp_earned + xp_awarded

            log = await daily_log_repo.write_daily_log(
                log, user_id, log_date, writes, connection
            )

            level_change = apply_xp(user, xp_awarded)
            evolution = None
            if xp_awarded > 0:
                await user_repo.save_fields(user, user_repo.XP_FIELDS, connection)
            if level_change.leveled_up:
                evolution = await check_and_apply_evolution(
                    user, level_change.previous_level, level_change.new_level, connection
                )

    if xp_awarded > 0:
        logger.info(
            f"User {user_id} {outcome.category} on {log_date}: +{xp_awarded} XP "
            f"(raw {outcome.raw_xp}, day {log.xp_earned}) awards={list(outcome.awards)}. "
            f"Total: {user.xp_total} XP, Level: {user.level}"
        )
    elif outcome.raw_xp > 0:
        logger.info(
            f"User {user_id} {outcome.category} on {log_date}: daily cap reached, "
            f"raw {outcome.raw_xp} XP not awarded"
        )
    else:
        logger.debug(f"User {user_id} {outcome.category} on {log_date}: no new XP")

    if level_change.leveled_up:
        logger.info(
            f"User {user_id} leveled up from {level_change.previous_level} "
            f"to {level_change.new_level}!"
        )

    return LedgerCommit(
        outcome=outcome,
        xp_awarded=xp_awarded,
        user=user,
        daily_log=log,
        goals=goals,
        level_change=level_change,
        evolution=evolution,
    )
