import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "url": os.getenv("SHEETS_API_URL", "http://sheets.test/exec"),
    "timeout": 5,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
