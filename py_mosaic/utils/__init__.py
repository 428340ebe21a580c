"""Shared helpers: process-wide PRNG and logging setup."""
