"""Adapters that touch the filesystem and the process environment."""
