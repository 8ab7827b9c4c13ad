"""Test fixtures: sample SchemaDescriptors and entity types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlitegen.schema.descriptor import Collation, ReferentialAction, SchemaDescriptor


@dataclass
class Team:
    id: int
    name: str


@dataclass
class User:
    id: int
    email: str
    display_name: Optional[str]
    team_id: Optional[int]
    active: bool
    balance: Decimal
    rating: float
    grade: str
    joined: Optional[str]


def teams_descriptor() -> SchemaDescriptor:
    """``teams``: integer autoincrement key and a unique NOCASE name."""
    return (
        SchemaDescriptor.builder("teams")
        .column("id", int, primary_key=True, autoincrement=True)
        .column("name", str, unique=True, collation=Collation.NOCASE, required=True)
        .build()
    )


def users_descriptor() -> SchemaDescriptor:
    """``users``: one column per common type class, plus a foreign key."""
    return (
        SchemaDescriptor.builder("users")
        .column("id", int, primary_key=True, autoincrement=True)
        .column("email", str, unique=True, required=True)
        .column("display_name", Optional[str])
        .column("team_id", Optional[int])
        .column("active", bool, default=True)
        .column("balance", Decimal, default=0)
        .column("rating", float, default=0.0)
        .column("grade_code", str, property_name="grade", default="C")
        .column("joined", Optional[datetime])
        .foreign_key("team_id", "teams", "id", on_delete=ReferentialAction.SET_NULL)
        .build()
    )


def memberships_descriptor() -> SchemaDescriptor:
    """``memberships``: composite key, composite unique group, two foreign keys."""
    return (
        SchemaDescriptor.builder("memberships")
        .column("user_id", int, primary_key=True)
        .column("team_id", int, primary_key=True)
        .column("role", str, required=True)
        .column("seat", int)
        .unique("uq_team_seat", "team_id", "seat")
        .foreign_key(
            "user_id",
            "users",
            "id",
            on_update=ReferentialAction.CASCADE,
            on_delete=ReferentialAction.CASCADE,
        )
        .foreign_key("team_id", "teams", "id", on_delete=ReferentialAction.RESTRICT)
        .without_rowid()
        .build()
    )
