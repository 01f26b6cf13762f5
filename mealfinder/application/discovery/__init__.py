"""Discovery query coordination."""
