"""Authentication for the Task Management API.

Credential storage with bcrypt hashing, HS256 bearer tokens, and the
register/login protocol that composes them.
"""
