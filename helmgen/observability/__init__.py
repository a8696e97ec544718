"""Logging for helmgen."""
