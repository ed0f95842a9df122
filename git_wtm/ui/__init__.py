"""User interface helpers for git-wtm."""
