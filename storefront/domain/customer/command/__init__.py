"""Customer domain commands."""
