#!/usr/bin/env python3
"""
Run script for deployment
"""

import uvicorn

from wifi_portal.core.config import settings

if __name__ == "__main__":
    # Run the application
    uvicorn.run(
        "wifi_portal.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
