"""
tt-bootstrap — provision a local Tarantool environment.
"""

__version__ = "0.1.0"
