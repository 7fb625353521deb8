"""SQLAlchemy Core table definitions for users and tasks.

These Table objects are used by the query builder to construct typed,
parameterized SQL. They are NOT an ORM: there's no object mapping, identity
map, or lazy loading. The owner ↔ tasks relation is a plain foreign key that
every task query filters on explicitly.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    false,
    func,
)
from taskmgmt_shared.task_models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(256), unique=True, nullable=False),  # stored lower-cased
    Column("password_hash", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "owner_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", String(TITLE_MAX_LENGTH), nullable=False),
    Column("description", String(DESCRIPTION_MAX_LENGTH), nullable=False, server_default=""),
    Column("due_date", DateTime(timezone=True), nullable=False),
    Column("is_complete", Boolean, nullable=False, server_default=false()),
    Index("ix_tasks_owner_due", "owner_id", "due_date"),
)
