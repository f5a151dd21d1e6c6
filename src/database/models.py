"""
Database models for the LifePush progression engine.

Structure:
- User: progression state (XP, level, streak, shields, mascot)
- HabitsConfig: per-user habit goals
- DailyLog: one ledger row per user per calendar day (raw values + award flags)
- Badge: badges granted to a user, at most one per type
"""

from tortoise import fields, models


class User(models.Model):
    """User progression state."""

    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=100, null=True)

    # IANA timezone name, e.g. "Europe/Berlin"
    timezone = fields.CharField(max_length=64, null=True)

    # underweight | normal | overweight | obese_1 | obese_2
    bmi_category = fields.CharField(max_length=20, null=True)

    # Mascot assignment
    mascot_id = fields.IntField(null=True)
    mascot_name = fields.CharField(max_length=100, null=True)
    mascot_stage = fields.IntField(default=1)  # 1, 2, 3

    # XP / level (level is cached, derived from xp_total)
    xp_total = fields.IntField(default=0)
    level = fields.IntField(default=1)

    # Streak
    current_streak = fields.IntField(default=0)
    longest_streak = fields.IntField(default=0)
    streak_shields = fields.IntField(default=0)
    streak_last_evaluated_date = fields.DateField(null=True)

    created_at = fields.DatetimeField(auto_now_add=True)

    daily_logs: fields.ReverseRelation["DailyLog"]
    badges: fields.ReverseRelation["Badge"]

    class Meta:
        table = "users"


class HabitsConfig(models.Model):
    """Habit goals chosen during onboarding."""

    id = fields.IntField(primary_key=True)
    user: fields.OneToOneRelation[User] = fields.OneToOneField(
        "models.User", related_name="habits_config", on_delete=fields.CASCADE
    )
    user_id: int  # AICODE-NOTE: MyPy hint for FK (Tortoise auto-creates this)

    daily_steps = fields.IntField(default=10000)
    hydration_glasses = fields.IntField(default=8)
    sleep_hours_min = fields.IntField(default=7)
    sleep_hours_max = fields.IntField(default=8)

    # chair_exercises | walking | jumping_jacks
    movement_preference = fields.CharField(max_length=20, default="walking")

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "habits_config"


class DailyLog(models.Model):
    """
    Daily habit ledger.

    Raw values may go up and down; *_xp_awarded flags and hydration_xp_glasses
    only ever move forward.
    """

    id = fields.IntField(primary_key=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="daily_logs", on_delete=fields.CASCADE
    )
    user_id: int

    date = fields.DateField()

    # Steps: effective = max(manual, device)
    steps = fields.IntField(null=True)
    steps_manual = fields.IntField(null=True)
    steps_device = fields.IntField(null=True)
    steps_goal_xp_awarded = fields.BooleanField(default=False)
    steps_last_bonus_at = fields.DatetimeField(null=True)

    # Hydration
    hydration_glasses = fields.IntField(null=True)
    hydration_xp_glasses = fields.IntField(default=0)  # high-water mark
    hydration_goal_xp_awarded = fields.BooleanField(default=False)

    # Sleep (HH:MM)
    sleep_start = fields.CharField(max_length=5, null=True)
    sleep_end = fields.CharField(max_length=5, null=True)
    sleep_hours = fields.FloatField(null=True)
    sleep_xp_start_awarded = fields.BooleanField(default=False)
    sleep_xp_end_awarded = fields.BooleanField(default=False)
    sleep_goal_xp_awarded = fields.BooleanField(default=False)

    # Movement
    movement_done = fields.BooleanField(default=False)
    movement_xp_awarded = fields.BooleanField(default=False)

    # Food checkboxes
    food_vegetables = fields.BooleanField(default=False)
    food_vegetables_xp_awarded = fields.BooleanField(default=False)
    food_no_junk = fields.BooleanField(default=False)
    food_no_junk_xp_awarded = fields.BooleanField(default=False)
    food_breakfast = fields.BooleanField(default=False)
    food_breakfast_xp_awarded = fields.BooleanField(default=False)

    # XP earned during the day (<= DAILY_XP_CAP)
    xp_earned = fields.IntField(default=0)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "daily_logs"
        unique_together = (("user", "date"),)


class Badge(models.Model):
    """Badge granted to a user."""

    id = fields.IntField(primary_key=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="badges", on_delete=fields.CASCADE
    )
    user_id: int

    # evolution_5 | champion
    badge_type = fields.CharField(max_length=30)
    badge_name = fields.CharField(max_length=100)
    awarded_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "badges"
        unique_together = (("user", "badge_type"),)
