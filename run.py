#!/usr/bin/env python3
"""Launch the project browser CLI.

Usage:
    python run.py [--config config.yaml] [--debug] [--trace] [--verbose] scan [PATH]
"""
from project_browser.main import run

if __name__ == "__main__":
    run()
