"""Shared utilities for logging and settings."""
