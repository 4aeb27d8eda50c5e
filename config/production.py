import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "url": os.getenv("SHEETS_API_URL", "please-set-SHEETS_API_URL"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "30")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
