"""Token-gated friend status services: basic, auth, user and push."""
