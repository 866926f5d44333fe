from __future__ import annotations

from typing import Annotated, Optional

import pytest

from fixture_app.pages.admin.users import UsersModel, _DraftsModel
from fixture_app.pages.home import IndexModel
from fixture_types import Box, Note, Tag
from fixture_vault import VaultModel
from riptide.errors import RiptideError
from riptide.pages import (
    Bind,
    Page,
    bound_properties,
    collect_roots,
    discover_pages,
    page_directory,
    page_name,
    render_component_scaffold,
    render_page_contract,
    render_route_ids,
    route_id,
)
from riptide.typeref import TypeRef
from riptide.validation import ModelStateEntry


class PlainModel(Page):
    title: str


class ArchiveModel(Page):
    notes: Annotated[list[Note], Bind]


def test_bound_properties_require_the_marker() -> None:
    assert [descriptor.name for descriptor in bound_properties(IndexModel)] == ["notes", "featured"]
    assert bound_properties(PlainModel) == []


def test_component_data_uses_camel_case_and_model_state() -> None:
    page = ArchiveModel()
    page.notes = []
    page.model_state["title"] = ModelStateEntry(raw_value="", attempted_value="")

    data = page.component_data()

    assert data is not None
    assert data["notes"] == []
    assert set(data["modelState"]) == {"title"}
    assert PlainModel().component_data() is None


def test_discover_pages_walks_packages() -> None:
    assert discover_pages(["fixture_app.pages"]) == [UsersModel, _DraftsModel, IndexModel]


def test_collect_roots_adds_model_state_entry() -> None:
    roots = collect_roots([IndexModel, IndexModel])
    assert roots == [TypeRef(list[Note]), TypeRef(Optional[Box[Tag]]), TypeRef(ModelStateEntry)]


def test_page_names_and_directories() -> None:
    assert page_name(IndexModel) == "Index"
    assert page_name(UsersModel) == "Users"
    assert page_directory(IndexModel) == ""
    assert page_directory(UsersModel) == "admin/"
    assert page_directory(UsersModel, pages_package="fixture_app") == "pages/admin/"


def test_route_ids() -> None:
    assert route_id(IndexModel) == "/"
    assert route_id(UsersModel) == "/admin/Users"
    assert route_id(_DraftsModel) is None
    assert render_route_ids([IndexModel, UsersModel, _DraftsModel]) == (
        "declare global {\n"
        '    type RouteId = "/" | "/admin/Users" | undefined | string & {};\n'
        "}\n"
        "export {}\n"
    )


def test_page_contract() -> None:
    assert render_page_contract(IndexModel, types_module_path="./types") == "\n".join(
        [
            'import type { Note, Box, Tag, ModelStateEntry } from "./types";',
            "",
            "export interface IndexData {",
            "    notes: Note[];",
            "    featured: Box<Tag>;",
            "    modelState: Record<string, ModelStateEntry>;",
            "}",
            "",
        ]
    )


def test_component_scaffolds() -> None:
    svelte = render_component_scaffold("Users")
    assert 'import type { UsersData } from "./Users";' in svelte
    assert "export let data: UsersData;" in svelte

    react = render_component_scaffold("Users", ".tsx")
    assert "export default function Users({ data }: { data: UsersData }) {" in react

    with pytest.raises(RiptideError):
        render_component_scaffold("Users", ".vue")


def test_page_contract_imports_only_declared_types() -> None:
    contract = render_page_contract(VaultModel, types_module_path="./types")

    assert contract.startswith('import type { Note, ModelStateEntry } from "./types";\n')
