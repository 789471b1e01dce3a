#!/usr/bin/env python3
"""
Run script for the MedLens analysis backend
"""
import uvicorn

from medlens.config.settings import settings
from medlens.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, reload=settings.debug)
