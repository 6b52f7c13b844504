from flickrsync import inventory
from flickrsync.models import RemoteItem


def test_find_set_id(make_client, capsys):
    client = make_client(sets=[{"id": "1", "title": "Other"}, {"id": "2", "title": "Holiday"}])

    assert inventory.find_set_id(client, "Holiday") == "2"
    assert "'Holiday' (id=2) is already existing" in capsys.readouterr().out
    assert client.calls == [("list_sets",)]


def test_find_set_id_missing(make_client):
    client = make_client(sets=[{"id": "1", "title": "holiday"}])
    assert inventory.find_set_id(client, "Holiday") is None


def test_list_remote_items(make_client):
    items = [RemoteItem("10", "x", "2024-03-05 13:07:09", "desc"), RemoteItem("11", "y")]
    client = make_client(items={"2": items})

    result = inventory.list_remote_items(client, "2")

    assert sorted(result) == ["10", "11"]
    assert result["10"].capture_date == "2024-03-05 13:07:09"
    assert result["10"].description == "desc"


def test_list_remote_items_without_set(make_client):
    client = make_client()
    assert inventory.list_remote_items(client, None) == {}
    assert client.calls == []
