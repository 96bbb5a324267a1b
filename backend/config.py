"""
Service settings loaded from the environment.

A ``.env`` file next to the process is read first, so local settings can live
there instead of in the shell.
"""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Comma separated list of origins allowed by the CORS middleware
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("PENSIONSIM_ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("PENSIONSIM_LOG_LEVEL", "INFO").upper()
