import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_PATH = os.getenv("DATABASE_PATH", "data/techcity.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SIMULATION_INTERVAL_SECONDS = int(os.getenv("SIMULATION_INTERVAL_SECONDS", "30"))
SIMULATOR_AUTOSTART = os.getenv("SIMULATOR_AUTOSTART", "false").lower() in ("1", "true", "yes")
BACKFILL_MAX_DAYS = int(os.getenv("BACKFILL_MAX_DAYS", "30"))

# Simulator tuning - hardcoded for easy tweaking
HEARTBEAT_SECONDS = 5 * 60
STAGGER_SECONDS = 1.0
