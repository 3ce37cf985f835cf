"""Command-line entry point.

Usage:
    itemloop
    itemloop --loop-limit 5000 --progress-interval 500
    python -m itemloop.cli --verbose
"""
