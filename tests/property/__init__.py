"""Property-based tests for errorlog."""
