"""Customer domain utilities."""
