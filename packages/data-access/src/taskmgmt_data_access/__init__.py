"""Durable storage for users and tasks: table definitions, engine factory, Task Store."""
