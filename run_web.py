#!/usr/bin/env python3
"""
Main entry point for the Teamsheet local web API.

This script configures logging and launches the Flask server.
"""
import logging

from teamsheet.ui.web_app import run_web_app
from teamsheet.utils import config

if __name__ == "__main__":
    logging.basicConfig(level=config.get_log_level(), format="%(levelname)s [%(name)s] %(message)s")
    run_web_app()
