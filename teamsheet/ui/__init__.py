"""
UI package for Teamsheet.

This package contains the local Flask JSON API used by the presentation layer.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
