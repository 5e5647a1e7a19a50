"""Developer HTTP host."""
