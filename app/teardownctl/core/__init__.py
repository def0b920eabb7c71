"""Core configuration and path handling for teardownctl."""
