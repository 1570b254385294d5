#!/usr/bin/env python3
"""Development server runner for the futsal booking service."""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "futsal_booking.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
