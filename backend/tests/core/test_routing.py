"""Route Definitions: invariants enforced at construction and documentation helpers.

Tests:
    - empty entity rejected
    - GET/DELETE routes cannot carry create/update schemas
    - error_responses covers 400/401/403/500 (+404 on id paths)
"""

import dataclasses

import pytest

from dynamic_crud.core.domain_types import HttpMethod
from dynamic_crud.core.routing import (
    OpenAPIMetadata, Route, error_responses, id_path_parameter,
)


async def _noop(request):
    return None


def _route(method=HttpMethod.GET, **kwargs):
    defaults = dict(
        method=method,
        path="/users",
        entity="User",
        handler=_noop,
        metadata=OpenAPIMetadata(summary="s", description="d"),
    )
    defaults.update(kwargs)
    return Route(**defaults)


def test_route_requires_entity_name():
    with pytest.raises(ValueError):
        _route(entity="")


@pytest.mark.parametrize("method", [HttpMethod.GET, HttpMethod.DELETE])
@pytest.mark.parametrize("slot", ["create_schema", "update_schema"])
def test_get_and_delete_never_carry_payload_schema(method, slot):
    with pytest.raises(ValueError):
        _route(method=method, **{slot: {"type": "object"}})


def test_post_may_carry_create_schema():
    route = _route(method=HttpMethod.POST, create_schema={"type": "object"})
    assert route.create_schema == {"type": "object"}


def test_route_is_frozen_and_middlewares_tupled():
    route = _route(middlewares=[1, 2])
    assert route.middlewares == (1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        route.path = "/other"


def test_error_responses_without_not_found():
    assert list(error_responses(with_not_found=False)) == ["400", "401", "403", "500"]


def test_error_responses_with_not_found():
    responses = error_responses(with_not_found=True)
    assert list(responses) == ["400", "401", "403", "404", "500"]
    assert responses["404"]["description"] == "Not Found"
    schema = responses["500"]["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/ErrorResponse"}


def test_id_path_parameter_is_required_uuid():
    param = id_path_parameter()
    assert param["name"] == "id"
    assert param["in"] == "path"
    assert param["required"] is True
    assert param["schema"]["format"] == "uuid"


def test_to_operation_omits_empty_parameters_and_body():
    op = OpenAPIMetadata(summary="Get Users", description="d", tags=("Users",)).to_operation()
    assert op == {
        "summary": "Get Users", "description": "d",
        "tags": ["Users"], "responses": {},
    }
