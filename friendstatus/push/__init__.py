"""Push service: delivers a status update to each of a user's friends."""
