"""Services for git-wtm."""
