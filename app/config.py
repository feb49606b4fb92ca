import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Pagination: distinct dates per page, and how many date rows to probe
DAYS_PER_LOAD = int(os.getenv("THOUGHTS_DAYS_PER_LOAD", "2"))
DATE_PROBE_LIMIT = int(os.getenv("THOUGHTS_DATE_PROBE_LIMIT", "100"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Sessions idle for longer than this are discarded with their loaded thoughts
SESSION_IDLE_TIMEOUT = int(os.getenv("SESSION_IDLE_TIMEOUT_SECONDS", "3600"))
