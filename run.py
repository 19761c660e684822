#!/usr/bin/env python3
"""Run script for Day Weaver."""

import logging
import os

import uvicorn
from dotenv import load_dotenv

from dayweaver.database.database import init_db

load_dotenv()

if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    init_db()
    uvicorn.run(
        "dayweaver.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "True").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
