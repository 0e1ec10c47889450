# sanitization/core/__init__.py

"""Core domain models and utilities used across the sanitization system.

This package provides category constants, profile models, result types,
exceptions, and the preset loader shared by the rest of the application.
"""
