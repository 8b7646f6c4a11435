from typing import Any
from uuid import UUID
import pytest

from user_api.app.domain.envelopes import ActionEnvelope, SearchEnvelope
from user_api.app.domain.models import User, UserInput
from user_api.app.domain.query_dsl import BoolQuery, FreeText, MatchAll
from user_api.app.domain.services.user_service import UserService
from user_api.app.platform.exceptions import (
    BackendConnectionError,
    DeserializationError,
    UserCreationFailed,
    UserNotFound,
)


@pytest.fixture
def service(mock_store):
    return UserService(store=mock_store, index="users")


def _action(**fields) -> ActionEnvelope[Any]:
    raw = {"_index": "users", "_id": "abc123", "_version": 1}
    raw.update(fields)
    return ActionEnvelope[Any].model_validate(raw)


def _search(*sources) -> SearchEnvelope:
    return SearchEnvelope.model_validate({
        "took": 1,
        "timed_out": False,
        "hits": {
            "total": {"value": len(sources), "relation": "eq"},
            "max_score": None,
            "hits": [{"_id": str(i), "_index": "users", "_score": None, "_source": s}
                     for i, s in enumerate(sources)],
        },
    })


# ----------------------
# create_user
# ----------------------
def test_create_user_stores_document_under_generated_id(service, mock_store):
    # given
    mock_store.create.return_value = _action(result="created")

    # when
    user = service.create_user(UserInput(name="kim", age=31, job="engineer"))

    # then
    assert isinstance(user.id, UUID)
    mock_store.create.assert_called_once()
    index, doc_id, document = mock_store.create.call_args.args
    assert index == "users"
    assert doc_id == str(user.id)
    assert document == {
        "id": str(user.id), "name": "kim", "age": 31,
        "job": "engineer", "relationship_status": None,
    }


@pytest.mark.parametrize("fields", [
    {"result": "updated", "created": True},
    {"created": True},
    {},
])
def test_create_user_fails_unless_result_is_created(service, mock_store, fields):
    mock_store.create.return_value = _action(**fields)

    with pytest.raises(UserCreationFailed) as ei:
        service.create_user(UserInput(name="kim", age=31))
    assert ei.value.result == fields.get("result")


def test_create_user_propagates_backend_error(service, mock_store):
    mock_store.create.side_effect = BackendConnectionError("down")

    with pytest.raises(BackendConnectionError):
        service.create_user(UserInput(name="kim", age=31))


# ----------------------
# get_user
# ----------------------
def test_get_user_returns_source(service, mock_store, user_source):
    mock_store.get.return_value = ActionEnvelope[User].model_validate(
        {"_index": "users", "_id": user_source["id"], "found": True, "_source": user_source}
    )

    user = service.get_user(user_source["id"])

    mock_store.get.assert_called_once_with("users", user_source["id"], User)
    assert user.name == "kim"


def test_get_user_not_found(service, mock_store):
    mock_store.get.return_value = ActionEnvelope[User].model_validate(
        {"_index": "users", "_id": "missing-id", "found": False}
    )

    with pytest.raises(UserNotFound) as ei:
        service.get_user("missing-id")
    assert ei.value.user_id == "missing-id"


def test_get_user_propagates_deserialization_error(service, mock_store):
    mock_store.get.side_effect = DeserializationError("bad envelope")

    with pytest.raises(DeserializationError):
        service.get_user("abc")


# ----------------------
# search_users
# ----------------------
@pytest.mark.parametrize("params, expected", [
    ({"query": "kim", "name": "lee"}, FreeText),
    ({"name": "kim"}, BoolQuery),
    ({}, MatchAll),
])
def test_search_users_builds_request(service, mock_store, params, expected):
    mock_store.search.return_value = _search()

    service.search_users(params)

    (request,), _ = mock_store.search.call_args
    assert isinstance(request.query, expected)


def test_search_users_drops_malformed_hits(service, mock_store, user_source):
    missing_name = {k: v for k, v in user_source.items() if k != "name"}
    mock_store.search.return_value = _search(user_source, missing_name)

    users = service.search_users({"job": "engineer"})

    assert [u.name for u in users] == ["kim"]
