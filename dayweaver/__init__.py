"""Day Weaver: a daily task planner."""
