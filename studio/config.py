import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./studio.db")

# Firebase Configuration
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Frontend base URL (CORS / security headers)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Studio defaults
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Europe/Warsaw")
# Tax is always charged at this rate on the amount actually paid
TAX_RATE_PERCENT = float(os.getenv("TAX_RATE_PERCENT", "8.5"))
# Booksy referral fee, applied to the first service line only
BOOKSY_FEE_RATE = float(os.getenv("BOOKSY_FEE_RATE", "0.4305"))
DEFAULT_TRAVEL_FEE = float(os.getenv("DEFAULT_TRAVEL_FEE", "20"))

DEFAULT_COST_CATEGORIES = ["rent", "ads", "print", "consumables", "other"]
