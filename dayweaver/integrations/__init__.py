"""External integrations for Day Weaver."""
