"""Record file storage layer.

This module loads and persists whole record collections as JSON or XML.
It reports missing, malformed and unreadable files as fault values.
"""
