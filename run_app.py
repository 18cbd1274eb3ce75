#!/usr/bin/env python3
"""
Simple runner script for the Flask application.
This script ensures the correct Python path is set and runs the app.
"""

import logging
import sys
from pathlib import Path

# Add the current directory to Python path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from app.main import app
from config_manager import get_app_config
from heritage_service.logging_config import setup_logging

if __name__ == "__main__":
    app_config = get_app_config()
    setup_logging(debug=app_config.debug)

    logging.getLogger("run_app").info("Starting Flask application from %s", current_dir)

    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
