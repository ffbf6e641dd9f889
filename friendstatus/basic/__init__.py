"""
Basic table service.

Generic table and entity operations for administrators, plus the token-gated
read and update paths used by everyone else.
"""
