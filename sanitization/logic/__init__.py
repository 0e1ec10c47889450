# sanitization/logic/__init__.py

"""Language and normalization helpers used by the engine passes."""
