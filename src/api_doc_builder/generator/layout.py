"""Layout generator: groups endpoints and emits render-ready instructions.

The instruction sequence is the contract with the rendering engine. It is
a pure function of the endpoints and document metadata, so two runs over
the same input produce equal layouts.
"""

import logging
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from api_doc_builder.parser.base import Endpoint

logger = logging.getLogger(__name__)

PARAMETER_COLUMNS = ("Name", "In", "Description", "Type", "Required")
RESPONSE_COLUMNS = ("Code", "Description")


class DocumentMeta(BaseModel):
    """Document-level metadata shown on the cover page and in PDF info."""

    model_config = ConfigDict(frozen=True)

    title: str
    subject: str
    author: str
    version: str


class EndpointGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    endpoints: list[Endpoint]


class GroupHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["group_header"] = "group_header"
    category: str


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    method: str
    path: str
    anchor: str


class Subtitle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["subtitle"] = "subtitle"
    text: str


class BodyText(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["body_text"] = "body_text"
    text: str


class MediaTypes(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["media_types"] = "media_types"
    consumes: list[str]
    produces: list[str]


class ParametersTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["parameters_table"] = "parameters_table"
    columns: tuple[str, ...] = PARAMETER_COLUMNS
    rows: list[tuple[str, str, str, str, str]]


class ResponsesTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["responses_table"] = "responses_table"
    columns: tuple[str, ...] = RESPONSE_COLUMNS
    rows: list[tuple[str, str]]


Instruction = Annotated[
    Union[GroupHeader, Heading, Subtitle, BodyText, MediaTypes, ParametersTable, ResponsesTable],
    Field(discriminator="kind"),
]


class NavigationLink(BaseModel):
    """A table-of-contents entry pointing at an endpoint heading."""

    model_config = ConfigDict(frozen=True)

    category: str
    anchor: str
    label: str


class Layout(BaseModel):
    model_config = ConfigDict(frozen=True)

    meta: DocumentMeta
    groups: list[EndpointGroup]
    instructions: list[Instruction]
    navigation: list[NavigationLink]


def group_endpoints(endpoints: list[Endpoint]) -> list[EndpointGroup]:
    """Partition endpoints by category, in first-seen category order.

    Endpoints keep their relative input order inside each group.
    """
    groups: dict[str, list[Endpoint]] = {}
    for ep in endpoints:
        groups.setdefault(ep.category, []).append(ep)
    return [EndpointGroup(category=category, endpoints=eps) for category, eps in groups.items()]


def display_name(endpoint: Endpoint) -> str:
    """Human-facing name: summary, then operationId, then "METHOD /path"."""
    summary = endpoint.summary
    if summary and summary != endpoint.path and summary != endpoint.operation_id:
        return summary
    if endpoint.operation_id:
        return endpoint.operation_id
    return f"{endpoint.method} {endpoint.path}"


def reference_key(endpoint: Endpoint) -> str:
    """Anchor used for cross-references.

    Not unique: two methods on one path without operationIds share a key.
    """
    return endpoint.operation_id or endpoint.path


def assemble(endpoints: list[Endpoint], meta: DocumentMeta) -> Layout:
    """Build the full layout for a list of endpoints."""
    groups = group_endpoints(endpoints)

    instructions: list[Instruction] = []
    for group in groups:
        instructions.append(GroupHeader(category=group.category))
        for ep in group.endpoints:
            instructions.extend(_endpoint_instructions(ep))

    navigation = [
        NavigationLink(category=group.category, anchor=reference_key(ep), label=f"{ep.method} {ep.path}")
        for group in groups
        for ep in group.endpoints
    ]

    logger.info("Assembled %d groups, %d instructions", len(groups), len(instructions))
    return Layout(meta=meta, groups=groups, instructions=instructions, navigation=navigation)


def _endpoint_instructions(ep: Endpoint) -> list[Instruction]:
    result: list[Instruction] = [Heading(method=ep.method, path=ep.path, anchor=reference_key(ep))]

    name = display_name(ep)
    if name != ep.path and name != ep.operation_id:
        result.append(Subtitle(text=name))

    if ep.description:
        result.append(BodyText(text=ep.description))

    if ep.consumes or ep.produces:
        result.append(MediaTypes(consumes=ep.consumes, produces=ep.produces))

    if ep.parameters:
        rows = [
            (p.name, p.location, p.description or "", p.param_type or "", "Yes" if p.required else "No")
            for p in ep.parameters
        ]
        result.append(ParametersTable(rows=rows))

    if ep.responses:
        rows = [(str(r.status_code), r.description or "") for r in ep.responses]
        result.append(ResponsesTable(rows=rows))

    return result
