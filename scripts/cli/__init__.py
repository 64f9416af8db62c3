"""
Calendar CLI: AD/BS conversion and BS accounting periods from the shell.

Entry point: python -m scripts.cli
"""

from scripts.cli.main import main

__all__ = ["main"]
