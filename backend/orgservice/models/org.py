"""
org.py — Organization shapes

Purpose:
- Represent an organization row from the `orgs` table.

Only `id` and `title` are read from an Org; any other column the backend
returns is kept on the model untouched.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

# Sentinel id used by the UI for an org that has not been saved yet
NEW_ORG_ID = "new"

# Opaque role tag (e.g. "admin", "member"); the backend owns the vocabulary
OrgUserRole = str


class Org(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: str = ""

    @property
    def is_new(self) -> bool:
        return not self.id or self.id == NEW_ORG_ID

