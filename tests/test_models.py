import pytest
from pydantic import ValidationError

from api_doc_builder.generator.layout import DocumentMeta
from api_doc_builder.parser.base import UNCATEGORIZED, Endpoint, Param, Response


class TestParam:
    def test_create_minimal_param(self):
        p = Param(name="id", location="path")
        assert p.required is False
        assert p.description is None
        assert p.param_type is None

    def test_param_is_immutable(self):
        p = Param(name="id", location="path", required=True)
        with pytest.raises(ValidationError):
            p.required = False


class TestEndpoint:
    def test_create_minimal_endpoint(self):
        ep = Endpoint(method="GET", path="/api/users")
        assert ep.category == UNCATEGORIZED
        assert ep.consumes == []
        assert ep.produces == []
        assert ep.parameters == []
        assert ep.responses == []

    def test_method_and_path_required(self):
        with pytest.raises(ValidationError):
            Endpoint(path="/api/users")

    def test_serialization_roundtrip(self):
        ep = Endpoint(
            category="users",
            operation_id="deleteUser",
            method="DELETE",
            path="/api/users/{id}",
            parameters=[Param(name="id", location="path", required=True, param_type="integer")],
            responses=[Response(status_code=204, description="Deleted")],
        )
        ep2 = Endpoint(**ep.model_dump())
        assert ep2 == ep


class TestDocumentMeta:
    def test_values_must_not_be_null(self):
        with pytest.raises(ValidationError):
            DocumentMeta(title=None, subject="", author="", version="")

    def test_empty_strings_accepted(self):
        meta = DocumentMeta(title="", subject="", author="", version="")
        assert meta.version == ""
