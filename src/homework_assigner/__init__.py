"""Homework assigner.

Assigns homework to the members of a GitHub team by opening one issue per
student, using the content of a Gist as the issue body:
- configuration loaded from `.env`
- structured logging
- a small GitHub REST client
- an interactive prompt workflow
"""

__version__ = "0.1.0"

from homework_assigner.config import AssignerSettings

__all__ = ["__version__", "AssignerSettings"]
