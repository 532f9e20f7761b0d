"""Shared utilities: structured logging setup."""
