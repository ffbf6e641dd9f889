"""Auth service: exchanges a user's password for a scoped token."""
