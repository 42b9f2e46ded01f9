"""
Application constants and environment-driven configuration.
"""
import os

# Rewards
CHECKIN_XP = 10
MISSION_XP = 5

# Missions seeded for every new user
DEFAULT_MISSIONS = [
    "Attended lectures today",
    "Read something today",
    "Didn't skip class",
]

# Database
DATABASE_URL = os.getenv("CAMPUS_LIFE_DATABASE_URL", "sqlite:///./campus_life.db")

# Auth tokens
JWT_SECRET = os.getenv(
    "CAMPUS_LIFE_JWT_SECRET",
    "campus-life-dev-secret-key-change-me-in-production",
)
JWT_ALGORITHM = "HS256"
TOKEN_EXPIRE_DAYS = int(os.getenv("CAMPUS_LIFE_TOKEN_EXPIRE_DAYS", "7"))

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/campus-life"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"

# CORS
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CAMPUS_LIFE_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Server
PORT = int(os.getenv("PORT", "3000"))
ENVIRONMENT = os.getenv("CAMPUS_LIFE_ENV", "development")

# Scheduler
AUTO_MISSION_RESET_ENABLED = os.getenv("CAMPUS_LIFE_AUTO_MISSION_RESET", "false").lower() in ("1", "true", "yes")
MISSION_RESET_TIME = os.getenv("CAMPUS_LIFE_MISSION_RESET_TIME", "00:00")

# Error messages returned to the client
MSG_ALL_FIELDS_REQUIRED = "All fields are required"
MSG_LOGIN_FIELDS_REQUIRED = "Email and password are required"
MSG_USER_EXISTS = "Email or username already exists"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_NO_TOKEN = "No token provided"
MSG_INVALID_TOKEN = "Invalid token"
MSG_UNAUTHORIZED = "Unauthorized"
MSG_USER_NOT_FOUND = "User not found"
MSG_MISSION_NOT_FOUND = "Mission not found"
MSG_ALREADY_CHECKED_IN = "Already checked in today"
