from uuid import UUID
import pytest
from pydantic import ValidationError

from user_api.app.domain.models import RelationshipStatus, User, UserInput


def test_enum_values():
    assert RelationshipStatus.single.value == "single"
    assert RelationshipStatus("married") is RelationshipStatus.married


def test_from_input_assigns_new_id():
    data = UserInput(name="kim", age=31, job="engineer", relationship_status="single")

    a = User.from_input(data)
    b = User.from_input(data)

    assert isinstance(a.id, UUID)
    assert a.id != b.id
    assert a.name == "kim"
    assert a.relationship_status is RelationshipStatus.single


def test_user_is_immutable():
    user = User.from_input(UserInput(name="kim", age=31))
    with pytest.raises(ValidationError):
        user.id = UUID("6f1c2b0e-3d7a-4c55-9a43-0e1b2c3d4e5f")


def test_user_input_ignores_client_id():
    data = UserInput.model_validate({"id": "client-chosen", "name": "kim", "age": 31})
    assert not hasattr(data, "id")
    assert User.from_input(data).id != "client-chosen"


@pytest.mark.parametrize("age", [-1, 256])
def test_age_out_of_range(age):
    with pytest.raises(ValidationError):
        UserInput(name="kim", age=age)


def test_optional_fields_default_to_none():
    data = UserInput(name="kim", age=0)
    assert data.job is None
    assert data.relationship_status is None


def test_unknown_relationship_status_rejected():
    with pytest.raises(ValidationError):
        UserInput(name="kim", age=31, relationship_status="divorced")


def test_to_document_is_json_ready(user_source):
    user = User.model_validate(user_source)
    doc = user.to_document()
    assert doc == user_source
    assert isinstance(doc["id"], str)
