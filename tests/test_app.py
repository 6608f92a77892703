import uuid
from unittest.mock import patch

import pytest

from sessiondemo.app import create_app, demo_a, main
from sessiondemo.database import Database, reset_db
from sessiondemo.schemas import (
    MSG_CODE_FAIL,
    MSG_CODE_NOT_LOGIN,
    MSG_CODE_SUCCESS,
    MSG_DESC_NOT_LOGIN,
    MSG_DESC_SUCCESS,
)

BASE = "/api/v1/account"
AUTH = {"Token": "token"}


@pytest.fixture
def database(tmp_path):
    db = Database(str(tmp_path / "app.db"))
    db.migrate()
    yield db
    db.close()


@pytest.fixture
def client(database):
    return create_app(database).test_client()


def _register(client, name, account):
    return client.get(f"{BASE}/register", json={"name": name, "account": account}).get_json()


def test_protected_route_without_token(client):
    body = client.get(f"{BASE}/list").get_json()
    assert body == {"msgCode": MSG_CODE_NOT_LOGIN, "desc": MSG_DESC_NOT_LOGIN}


def test_register_succeeds(client):
    body = _register(client, "Alice", "alice")
    assert body == {"msgCode": MSG_CODE_SUCCESS, "desc": MSG_DESC_SUCCESS}


def test_login_returns_account_and_new_token(client):
    _register(client, "Alice", "alice")
    response = client.get(f"{BASE}/login", json={"account": "alice"})
    assert response.status_code == 200
    body = response.get_json()
    assert body["msgCode"] == MSG_CODE_SUCCESS
    assert body["data"]["account"] == "alice"
    assert body["data"]["name"] == "Alice"
    assert uuid.UUID(body["data"]["token"]).version == 1
    assert uuid.UUID(body["data"]["uuid"]).version == 1


def test_login_without_body_fails(client):
    body = client.get(f"{BASE}/login").get_json()
    assert body["msgCode"] == MSG_CODE_FAIL


def test_login_unknown_account_fails(client):
    body = client.get(f"{BASE}/login", json={"account": "ghost"}).get_json()
    assert body["msgCode"] == MSG_CODE_FAIL


def test_list_returns_page(client):
    for name in ["a", "b"]:
        _register(client, name, name)
    body = client.get(f"{BASE}/list", json={"page": 0, "pageSize": 10}, headers=AUTH).get_json()
    data = body["data"]
    assert data["total"] == 100
    assert data["page"] == 0
    assert data["pageSize"] == 10
    assert [item["name"] for item in data["list"]] == ["a", "b"]


def test_list_empty_is_null(client):
    body = client.get(f"{BASE}/list", json={"page": 0, "pageSize": 10}, headers=AUTH).get_json()
    assert body["data"]["list"] is None


def test_edit_and_check(client):
    _register(client, "old", "old")
    login = client.get(f"{BASE}/login", json={"account": "old"}).get_json()
    account_uuid = login["data"]["uuid"]
    edit = client.get(
        f"{BASE}/edit",
        json={"uuid": account_uuid, "name": "new", "account": "renamed"},
        headers=AUTH,
    ).get_json()
    assert edit["msgCode"] == MSG_CODE_SUCCESS
    check = client.get(f"{BASE}/check", headers=AUTH).get_json()
    assert check["data"] == {
        "id": login["data"]["id"],
        "account": "renamed",
        "name": "new",
        "uuid": account_uuid,
    }


def test_edit_unknown_uuid_fails(client):
    body = client.get(
        f"{BASE}/edit", json={"uuid": str(uuid.uuid4()), "name": "x"}, headers=AUTH
    ).get_json()
    assert body["msgCode"] == MSG_CODE_FAIL


def test_check_without_accounts_fails(client):
    body = client.get(f"{BASE}/check", headers=AUTH).get_json()
    assert body["msgCode"] == MSG_CODE_FAIL


def test_close_then_close_again(client):
    _register(client, "c", "closer")
    login = client.get(f"{BASE}/login", json={"account": "closer"}).get_json()
    payload = {"uuid": login["data"]["uuid"], "account": "closer"}
    first = client.get(f"{BASE}/close", json=payload, headers=AUTH).get_json()
    assert first["msgCode"] == MSG_CODE_SUCCESS
    second = client.get(f"{BASE}/close", json=payload, headers=AUTH).get_json()
    assert second == {"msgCode": MSG_CODE_FAIL, "desc": "删除失败"}


def test_logout(client):
    body = client.get(f"{BASE}/logout", headers=AUTH).get_json()
    assert body == {"msgCode": 200, "desc": MSG_DESC_SUCCESS}


def test_demo_a_logs(capsys):
    assert demo_a() == {"A": "1"}
    assert "这是 demo-main" in capsys.readouterr().out


def test_main_serves_on_requested_port(tmp_path):
    with patch("flask.Flask.run") as run:
        try:
            code = main(["--db", str(tmp_path / "main.db"), "--port", "9000"])
        finally:
            reset_db()
    assert code == 0
    run.assert_called_once_with(host="0.0.0.0", port=9000)