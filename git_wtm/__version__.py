"""Version information for git-wtm."""

__version__ = "0.1.0"
