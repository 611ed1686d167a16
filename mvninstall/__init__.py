"""Local repository install service."""
