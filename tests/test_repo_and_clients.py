import pytest

from quotebook.models.client import Client
from quotebook.services.client_service import ClientService
from quotebook.storage.repo import InMemoryRepository


def test_repository_crud(client):
    repo = InMemoryRepository(entity_name="client")
    repo.add(client)
    with pytest.raises(ValueError):
        repo.add(client)

    got = repo.get_by_id("client1")
    assert got == client and got is not client

    got.phone = "000"
    assert repo.get_by_id("client1").phone == "+27 11 555 1234"
    repo.update(got)
    assert repo.get_by_id("client1").phone == "000"

    with pytest.raises(KeyError):
        repo.update(Client(id="nope", name="x"))
    repo.upsert(Client(id="nope", name="x"))
    assert [c.id for c in repo.list_all()] == ["client1", "nope"]
    assert repo.find_one(lambda c: c.name == "x").id == "nope"
    assert repo.delete("nope") is True
    assert repo.delete("nope") is False


def test_client_service(client):
    svc = ClientService()
    loaded = svc.load([client.model_dump(), {"name": "Bad", "email": "not-an-email"}])
    assert [c.id for c in loaded] == ["client1"]
    assert svc.get_by_id("client1").display_name == "Contas Inc."
    assert svc.get_by_id(None) is None
    assert svc.get_by_id("") is None

    john = svc.save(Client(name="John Doe"))
    assert john.display_name == "John Doe"
    assert len(svc.list_clients()) == 2

    # suppression: les documents gardent un client_id orphelin
    assert svc.delete("client1") is True
    assert svc.get_by_id("client1") is None
