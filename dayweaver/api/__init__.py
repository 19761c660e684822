"""HTTP and WebSocket API for Day Weaver."""
