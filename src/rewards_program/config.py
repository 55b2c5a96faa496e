# rewards_program/config.py
# Settings read from the environment (and a local .env if present)

import os

from dotenv import load_dotenv

load_dotenv()

DB_PATH = os.getenv("REWARDS_DB_PATH", "rewards.db")
API_PREFIX = os.getenv("REWARDS_API_PREFIX", "/api/rewards")

LOG_LEVEL = os.getenv("REWARDS_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("REWARDS_LOG_FILE") or None

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("REWARDS_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

HOST = os.getenv("REWARDS_HOST", "127.0.0.1")
PORT = int(os.getenv("REWARDS_PORT", "8000"))
