import os

from .base import *  # noqa: F401,F403

DEBUG = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
JOB_TOKEN = os.getenv("JOB_TOKEN", "dev-job-token")
