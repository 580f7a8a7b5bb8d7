"""
CLI Command Modules

Each module contains a logical group of related commands.
"""

from calcguard.cli import lint

__all__ = ['lint']
