"""Shared contracts for the Task Management API.

Provides the Pydantic result envelope and error kinds, the auth and task
boundary models, and the immutable service settings used by every package.
"""
