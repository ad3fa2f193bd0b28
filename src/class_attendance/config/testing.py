from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
JOB_TOKEN = "test-job-token"
MAIL_SUPPRESS_SEND = True
