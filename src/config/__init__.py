"""
Environment configuration for the API server.

Declares the recognized variables, validates and coerces the raw
environment, and derives the immutable nested configuration snapshot.
"""
