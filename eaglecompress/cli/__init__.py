"""
Command Line Interface for Eagle Compress.

This module provides the main entry point for the Eagle Compress CLI.
It imports and registers all command groups from the commands package.
"""
from .commands import app

__all__ = ['app']
