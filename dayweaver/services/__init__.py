"""Session services for Day Weaver."""
