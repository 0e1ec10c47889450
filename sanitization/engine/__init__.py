# sanitization/engine/__init__.py

"""Engine package providing classification, markup, guard, and filter passes.

This package contains the components that implement the ordered
multi-pass sanitization and the read-only detection scan.
"""
