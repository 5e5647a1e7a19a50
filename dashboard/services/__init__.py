"""Report fetching, projection and form services."""
