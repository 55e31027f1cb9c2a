from config.config import *  # noqa: F401,F403
from config.config import Config

SECRET_KEY = Config.SECRET_KEY or "please-set-SECRET_KEY"

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
