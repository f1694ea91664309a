"""Text template utilities."""
