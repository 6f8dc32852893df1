"""Strongly typed identifiers for domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CategoryId = NewType("CategoryId", UUID)
TagId = NewType("TagId", UUID)
