import os

from ._common import db_config_from_env

SECRET_KEY = "test-secret-key"

DB_CONFIG = db_config_from_env()
DB_CONFIG["database"] = os.getenv("DB_NAME", "irs_timesheet_test")

DEBUG = True
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = False
AUTO_SEED_DB = False

NOTIFY_CHANNEL = "share"
SMTP_CONFIG: dict = {}
