from .config import SESSION_DAYS, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Tests inject an in-memory container; never touch MySQL on startup.
AUTO_INIT_DB = False
AUTO_SEED_DB = False
