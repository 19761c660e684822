"""Task store for Day Weaver."""
