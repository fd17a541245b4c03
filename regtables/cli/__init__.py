"""CLI module for regtables.

This module provides the command-line interface.
"""
