"""Typed data models for parsed API descriptions.

The extractor converts the loosely-typed spec tree into these models;
the layout generator only ever sees these.
"""

from pydantic import BaseModel, ConfigDict

UNCATEGORIZED = "Uncategorized"


class Param(BaseModel):
    """A single operation parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str  # query / path / header / body / formData
    required: bool = False
    description: str | None = None
    param_type: str | None = None  # string / integer / ... / object


class Response(BaseModel):
    """A documented response, keyed by numeric status code."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    description: str | None = None


class Endpoint(BaseModel):
    """A single (method, path) pair with all its metadata."""

    model_config = ConfigDict(frozen=True)

    category: str = UNCATEGORIZED
    operation_id: str | None = None
    method: str  # GET / POST / PUT / DELETE / PATCH ...
    path: str  # /pets/{petId}
    summary: str | None = None
    description: str | None = None
    consumes: list[str] = []
    produces: list[str] = []
    parameters: list[Param] = []
    responses: list[Response] = []
