"""
Configuration for the CAD Risk Assessment API
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

# Backend port
if os.getenv("BACKEND_PORT"):
    BACKEND_PORT = os.getenv("BACKEND_PORT")
else:
    BACKEND_PORT = 8000

# Optional YAML file whose scoring section overrides the default rules
SCORING_CONFIG = os.getenv("SCORING_CONFIG")

# Comma-separated list of allowed browser origins
if os.getenv("CORS_ORIGINS"):
    CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS").split(",") if origin.strip()]
else:
    CORS_ORIGINS = [
        "http://localhost:8000",
        "http://localhost:8080",
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8080",
    ]
