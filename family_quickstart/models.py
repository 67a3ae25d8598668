"""
Pydantic document models for the Family container.

Attributes are snake_case; documents on the wire use the PascalCase
aliases, except the identifier which Cosmos DB requires as lowercase "id".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Container partition key; Family.last_name is stored under this path.
PARTITION_KEY_PATH = "/LastName"


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_document(self) -> dict[str, Any]:
        """Serialise to the JSON-compatible dict stored in the container."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def __str__(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class Parent(_Document):
    first_name: str = Field(alias="FirstName")
    family_name: str | None = Field(default=None, alias="FamilyName")


class Pet(_Document):
    given_name: str = Field(alias="GivenName")


class Child(_Document):
    first_name: str = Field(alias="FirstName")
    family_name: str | None = Field(default=None, alias="FamilyName")
    gender: str = Field(alias="Gender")
    grade: int = Field(alias="Grade")
    pets: list[Pet] | None = Field(default=None, alias="Pets")


class Address(_Document):
    state: str = Field(alias="State")
    county: str = Field(alias="County")
    city: str = Field(alias="City")


class Family(_Document):
    """A family record, partitioned by last name."""

    id: str
    last_name: str = Field(alias="LastName")  # partition key
    parents: list[Parent] = Field(default_factory=list, alias="Parents")
    children: list[Child] = Field(default_factory=list, alias="Children")
    address: Address = Field(alias="Address")
    is_registered: bool = Field(default=False, alias="IsRegistered")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Family:
        """Parse a stored document; system properties (_rid, _etag, ...) are dropped."""
        return cls.model_validate(doc)
