from tortoise import BaseDBAsyncClient

RUN_IN_TRANSACTION = True


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "users" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "name" VARCHAR(100),
    "timezone" VARCHAR(64),
    "bmi_category" VARCHAR(20),
    "mascot_id" INT,
    "mascot_name" VARCHAR(100),
    "mascot_stage" INT NOT NULL DEFAULT 1,
    "xp_total" INT NOT NULL DEFAULT 0,
    "level" INT NOT NULL DEFAULT 1,
    "current_streak" INT NOT NULL DEFAULT 0,
    "longest_streak" INT NOT NULL DEFAULT 0,
    "streak_shields" INT NOT NULL DEFAULT 0,
    "streak_last_evaluated_date" DATE,
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);
COMMENT ON TABLE "users" IS 'User progression state.';
CREATE TABLE IF NOT EXISTS "habits_config" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "daily_steps" INT NOT NULL DEFAULT 10000,
    "hydration_glasses" INT NOT NULL DEFAULT 8,
    "sleep_hours_min" INT NOT NULL DEFAULT 7,
    "sleep_hours_max" INT NOT NULL DEFAULT 8,
    "movement_preference" VARCHAR(20) NOT NULL DEFAULT 'walking',
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "user_id" INT NOT NULL UNIQUE REFERENCES "users" ("id") ON DELETE CASCADE
);
COMMENT ON TABLE "habits_config" IS 'Habit goals chosen during onboarding.';
CREATE TABLE IF NOT EXISTS "daily_logs" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "date" DATE NOT NULL,
    "steps" INT,
    "steps_manual" INT,
    "steps_device" INT,
    "steps_goal_xp_awarded" BOOL NOT NULL DEFAULT False,
    "steps_last_bonus_at" TIMESTAMPTZ,
    "hydration_glasses" INT,
    "hydration_xp_glasses" INT NOT NULL DEFAULT 0,
    "hydration_goal_xp_awarded" BOOL NOT NULL DEFAULT False,
    "sleep_start" VARCHAR(5),
    "sleep_end" VARCHAR(5),
    "sleep_hours" DOUBLE PRECISION,
    "sleep_xp_start_awarded" BOOL NOT NULL DEFAULT False,
    "sleep_xp_end_awarded" BOOL NOT NULL DEFAULT False,
    "sleep_goal_xp_awarded" BOOL NOT NULL DEFAULT False,
    "movement_done" BOOL NOT NULL DEFAULT False,
    "movement_xp_awarded" BOOL NOT NULL DEFAULT False,
    "food_vegetables" BOOL NOT NULL DEFAULT False,
    "food_vegetables_xp_awarded" BOOL NOT NULL DEFAULT False,
    "food_no_junk" BOOL NOT NULL DEFAULT False,
    "food_no_junk_xp_awarded" BOOL NOT NULL DEFAULT False,
    "food_breakfast" BOOL NOT NULL DEFAULT False,
    "food_breakfast_xp_awarded" BOOL NOT NULL DEFAULT False,
    "xp_earned" INT NOT NULL DEFAULT 0,
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "user_id" INT NOT NULL REFERENCES "users" ("id") ON DELETE CASCADE,
    CONSTRAINT "uid_daily_logs_user_id_4614a1" UNIQUE ("user_id", "date")
);
COMMENT ON TABLE "daily_logs" IS 'Daily habit ledger.';
CREATE TABLE IF NOT EXISTS "badges" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "badge_type" VARCHAR(30) NOT NULL,
    "badge_name" VARCHAR(100) NOT NULL,
    "awarded_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "user_id" INT NOT NULL REFERENCES "users" ("id") ON DELETE CASCADE,
    CONSTRAINT "uid_badges_user_id_b3c1e2" UNIQUE ("user_id", "badge_type")
);
COMMENT ON TABLE "badges" IS 'Badge granted to a user.';
CREATE TABLE IF NOT EXISTS "aerich" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSONB NOT NULL
);"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        DROP TABLE IF EXISTS "badges";
        DROP TABLE IF EXISTS "daily_logs";
        DROP TABLE IF EXISTS "habits_config";
        DROP TABLE IF EXISTS "users";"""
