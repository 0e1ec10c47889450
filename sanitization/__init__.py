# sanitization/__init__.py

"""Unicode text sanitization engine.

Removes invisible formatting marks, bidirectional controls, markup and
other unwanted code points according to a declarative profile.
"""
