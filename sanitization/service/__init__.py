# sanitization/service/__init__.py

"""Service boundary: settings and the sanitize/detect entry points."""
