"""
CLI module for runtime-files.

Provides a command-line interface for inspecting a rooted file tree the
way the module-loading runtime sees it.
"""

from runtime_files.cli.main import cli

__all__ = ["cli"]
