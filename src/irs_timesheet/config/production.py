import os

from ._common import db_config_from_env, smtp_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = False

NOTIFY_CHANNEL = os.getenv("NOTIFY_CHANNEL", "mail_queue")
SMTP_CONFIG = smtp_config_from_env()
