"""Dependency manifest input/output."""
