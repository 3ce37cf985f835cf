"""Interactive item-list session driven by line-based commands.

Structure:
- itemloop/config.py: Configuration via pydantic-settings
- itemloop/models.py: Commands, session state and result models
- itemloop/session.py: The read-dispatch-respond loop
- itemloop/lib/: Reusable pieces (item collection, stop signal, metrics)
- itemloop/cli/: typer entry point (``itemloop`` console script)
"""
