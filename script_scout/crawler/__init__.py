"""Fetching, queueing and script discovery."""
