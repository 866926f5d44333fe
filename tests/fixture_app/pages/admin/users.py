from __future__ import annotations

from typing import Annotated

from fixture_types import Author, Note, Priority
from riptide.pages import Bind, Page


class UsersModel(Page):
    users: Annotated[dict[str, Author], Bind]
    priority: Annotated[Priority, Bind]


class _DraftsModel(Page):
    drafts: Annotated[list[Note], Bind]
