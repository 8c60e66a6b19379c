"""
Generic utility functions shared across modules.

Currently holds the process-wide logging setup.
"""
