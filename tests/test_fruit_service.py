import pytest

from orchard.auth.sessions import SessionManager
from orchard.fruits.service import FruitService
from orchard.stores.fruits import FruitStore
from orchard.utils.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)

MANGO = {"name": "mango", "color": "yellow", "emoji": "🥭"}
GRAPE = {"name": "grape", "color": "purple", "emoji": "🍇"}


@pytest.fixture
def sessions(clock):
    return SessionManager(["service-key"], clock=clock)


@pytest.fixture
def service(sessions):
    return FruitService(FruitStore(), sessions)


@pytest.fixture
def alice(sessions):
    return sessions.issue("alice")


@pytest.fixture
def bob(sessions):
    return sessions.issue("bob")


def test_create_assigns_owner_and_id(service, alice):
    fruit = service.create_fruit(alice, MANGO)
    assert fruit.owner_id == "alice"
    assert fruit.name == "mango"
    assert service.get_fruit(fruit.id) == fruit


def test_create_ignores_client_supplied_id_and_owner(service, alice):
    fruit = service.create_fruit(alice, {**MANGO, "id": "mine", "ownerId": "bob"})
    assert fruit.id != "mine"
    assert fruit.owner_id == "alice"


def test_create_requires_session(service):
    with pytest.raises(UnauthenticatedError) as exc:
        service.create_fruit(None, MANGO)
    assert exc.value.message == "You need to be logged in to create a fruit"


def test_session_check_comes_before_field_check(service):
    with pytest.raises(UnauthenticatedError):
        service.create_fruit("not-a-token", {})


@pytest.mark.parametrize("missing", ["name", "color", "emoji"])
def test_create_requires_all_fields(service, alice, missing):
    payload = {**MANGO, missing: ""}
    with pytest.raises(ValidationError) as exc:
        service.create_fruit(alice, payload)
    assert exc.value.message == "Provide name, color and emoji to create a fruit"
    assert service.list_fruits() == []


@pytest.mark.parametrize("value", [5, True, ["mango"], {"n": 1}, None])
def test_fields_must_be_strings(service, alice, value):
    with pytest.raises(ValidationError):
        service.create_fruit(alice, {**MANGO, "name": value})
    fruit = service.create_fruit(alice, MANGO)
    with pytest.raises(ValidationError):
        service.update_fruit(alice, fruit.id, {**GRAPE, "color": value})


def test_update_by_owner(service, alice):
    fruit = service.create_fruit(alice, MANGO)
    updated = service.update_fruit(alice, fruit.id, GRAPE)
    assert updated.id == fruit.id
    assert updated.owner_id == "alice"
    assert service.get_fruit(fruit.id).name == "grape"


def test_update_by_other_user_is_forbidden(service, alice, bob):
    fruit = service.create_fruit(alice, MANGO)
    with pytest.raises(ForbiddenError) as exc:
        service.update_fruit(bob, fruit.id, GRAPE)
    assert exc.value.message == "You are not the owner of this fruit"
    assert service.get_fruit(fruit.id).name == "mango"


def test_update_missing_fruit(service, alice):
    with pytest.raises(NotFoundError):
        service.update_fruit(alice, "nope", GRAPE)


def test_update_checks_fields_before_existence_and_ownership(service, alice, bob):
    fruit = service.create_fruit(alice, MANGO)
    with pytest.raises(ValidationError):
        service.update_fruit(bob, "nope", {})
    with pytest.raises(ValidationError):
        service.update_fruit(bob, fruit.id, {"name": "grape"})


def test_update_checks_existence_before_ownership(service, bob):
    with pytest.raises(NotFoundError):
        service.update_fruit(bob, "nope", GRAPE)


def test_delete_by_owner(service, alice):
    fruit = service.create_fruit(alice, MANGO)
    service.delete_fruit(alice, fruit.id)
    with pytest.raises(NotFoundError):
        service.get_fruit(fruit.id)


def test_delete_rules(service, alice, bob):
    fruit = service.create_fruit(alice, MANGO)
    with pytest.raises(UnauthenticatedError) as exc:
        service.delete_fruit(None, fruit.id)
    assert exc.value.message == "You need to be logged in to delete a fruit"
    with pytest.raises(NotFoundError):
        service.delete_fruit(bob, "nope")
    with pytest.raises(ForbiddenError):
        service.delete_fruit(bob, fruit.id)
    assert service.get_fruit(fruit.id) == fruit


def test_expired_session_cannot_mutate(service, alice, clock):
    fruit = service.create_fruit(alice, MANGO)
    clock.advance(601)
    with pytest.raises(UnauthenticatedError):
        service.update_fruit(alice, fruit.id, GRAPE)


def test_reads_need_no_session(service, alice):
    fruit = service.create_fruit(alice, MANGO)
    assert service.list_fruits() == [fruit]
    with pytest.raises(NotFoundError) as exc:
        service.get_fruit("nope")
    assert exc.value.message == "Sorry, fruit not found"
