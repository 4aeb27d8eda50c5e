import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Spreadsheet web app (``/exec`` endpoint of the deployed script)
API_CONFIG = {
    "url": os.getenv("SHEETS_API_URL", "http://localhost:8080/exec"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "30")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
