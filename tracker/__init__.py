"""
Bug Tracker API.

Flask backend for tracking bugs, developers and projects behind
password login and bearer-token authorization.
"""

__version__ = "1.0.0"
