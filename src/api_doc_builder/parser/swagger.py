"""OpenAPI / Swagger document parser.

Turns the raw spec tree of a flat "paths + inline parameters" document
into Endpoint models. Extraction is best-effort: irregular fields fall
back to defaults and malformed method nodes are skipped, so the only
error it raises is ParseError for a missing ``paths`` collection, and
only when the caller asks for it.
"""

import json
import logging
import re
from pathlib import Path

import yaml

from api_doc_builder.errors import InputMissing, ParseError
from api_doc_builder.parser.base import UNCATEGORIZED, Endpoint, Param, Response

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_STATUS_CODE = re.compile(r"0|[1-9][0-9]*")


def load_document(file_path: Path) -> tuple[str, dict]:
    """Read a spec file and return its raw text along with the parsed tree."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputMissing(file_path) from None
    except (OSError, UnicodeDecodeError) as e:
        raise InputMissing(file_path, detail=str(e)) from e
    return text, parse_document(text)


def parse_document(text: str) -> dict:
    """Parse JSON or YAML text into a raw spec tree."""
    try:
        doc = json.loads(text)
    except ValueError:
        # Not JSON; YAML is a superset for everything else we accept
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.debug("Document is not valid JSON/YAML: %s", e)
            raise ParseError("invalid document") from e
    if not isinstance(doc, dict):
        raise ParseError("invalid document")
    return doc


def extract(doc: dict, strict: bool = False) -> list[Endpoint]:
    """Extract one Endpoint per path+method pair, in source order.

    A document without a ``paths`` mapping yields no endpoints, or raises
    ParseError("missing paths") when ``strict`` is set.
    """
    paths = doc.get("paths") if isinstance(doc, dict) else None
    if not isinstance(paths, dict):
        if strict:
            raise ParseError("missing paths")
        logger.info("Document has no paths collection; nothing to extract")
        return []

    endpoints = []
    for path, methods in paths.items():
        if not isinstance(methods, dict) or path in (None, ""):
            logger.debug("Skipping path %r: path item is not an object", path)
            continue

        for method, operation in methods.items():
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                logger.debug("Skipping %s %s: operation is not an object", method.upper(), path)
                continue
            endpoints.append(_build_endpoint(str(path), method, operation))

    logger.info("Extracted %d endpoints from %d paths", len(endpoints), len(paths))
    return endpoints


def _build_endpoint(path: str, method: str, operation: dict) -> Endpoint:
    return Endpoint(
        category=_category(operation.get("tags")),
        operation_id=_text(operation.get("operationId")),
        method=method.upper(),
        path=path,
        summary=_text(operation.get("summary")),
        description=_text(operation.get("description")),
        consumes=_string_list(operation.get("consumes")),
        produces=_string_list(operation.get("produces")),
        parameters=_parse_parameters(operation.get("parameters")),
        responses=_parse_responses(operation.get("responses")),
    )


def _parse_parameters(params) -> list[Param]:
    if not isinstance(params, list):
        return []

    result = []
    for p in params:
        if not isinstance(p, dict):
            logger.debug("Skipping parameter %r: not an object", p)
            continue
        result.append(
            Param(
                name=_verbatim(p.get("name")),
                location=_verbatim(p.get("in")),
                required=_required(p.get("required")),
                description=_text(p.get("description")),
                param_type=_param_type(p),
            )
        )
    return result


def _parse_responses(responses) -> list[Response]:
    if not isinstance(responses, dict):
        return []

    result = []
    for key, resp in responses.items():
        status_code = _status_code(key)
        if status_code is None:
            logger.debug("Skipping response %r: not an integer status code", key)
            continue
        description = resp.get("description") if isinstance(resp, dict) else None
        result.append(Response(status_code=status_code, description=_text(description)))
    return result


# Field defaults. Every fallback applied during extraction is decided here.


def _category(tags) -> str:
    if isinstance(tags, list) and tags and isinstance(tags[0], str) and tags[0]:
        return tags[0]
    return UNCATEGORIZED


def _text(value) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _verbatim(value) -> str:
    return _text(value) or ""


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _required(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _param_type(param: dict) -> str | None:
    declared = param.get("type")
    if isinstance(declared, str) and declared:
        return declared
    if declared is None and isinstance(param.get("schema"), dict):
        return "object"
    return None


def _status_code(key) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and _STATUS_CODE.fullmatch(key):
        return int(key)
    return None
