"""
Crisis Search

Natural-language filter extraction and resource search for crisis workers.
"""

__version__ = "0.1.0"
