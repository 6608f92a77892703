"""Request and response shapes of the account API and its status codes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

HTTP_CODE_SUCCESS = 200
HTTP_CODE_SERVER_ERROR = 500

MSG_CODE_SUCCESS = 100
MSG_DESC_SUCCESS = "成功"

MSG_CODE_FAIL = 200
MSG_DESC_FAIL = "失败"

MSG_CODE_ACCIDENT = 300
MSG_DESC_ACCIDENT = "异常"

MSG_CODE_NOT_LOGIN = 101
MSG_DESC_NOT_LOGIN = "未登录"


class BindError(ValueError):
    """Raised when a request body cannot be bound to a request shape."""


def _require_object(data: Any) -> Mapping[str, Any]:
    if data is None:
        raise BindError("request body is empty")
    if not isinstance(data, Mapping):
        raise BindError("request body must be a JSON object")
    return data


def _get_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise BindError(f"field {key!r} must be a string")
    return value


def _get_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise BindError(f"field {key!r} must be an integer")
    return value


@dataclass
class AccountListRequest:
    page: int = 0
    page_size: int = 0
    name: str = ""

    @classmethod
    def from_json(cls, data: Any) -> AccountListRequest:
        body = _require_object(data)
        return cls(
            page=_get_int(body, "page"),
            page_size=_get_int(body, "pageSize"),
            name=_get_str(body, "name"),
        )


@dataclass
class AccountRegisterRequest:
    name: str = ""
    account: str = ""

    @classmethod
    def from_json(cls, data: Any) -> AccountRegisterRequest:
        body = _require_object(data)
        return cls(name=_get_str(body, "name"), account=_get_str(body, "account"))


@dataclass
class AccountLoginRequest:
    account: str = ""

    @classmethod
    def from_json(cls, data: Any) -> AccountLoginRequest:
        body = _require_object(data)
        return cls(account=_get_str(body, "account"))


@dataclass
class AccountEditInfoRequest:
    uuid: str = ""
    name: str = ""
    account: str = ""

    @classmethod
    def from_json(cls, data: Any) -> AccountEditInfoRequest:
        body = _require_object(data)
        return cls(
            uuid=_get_str(body, "uuid"),
            name=_get_str(body, "name"),
            account=_get_str(body, "account"),
        )


@dataclass
class AccountCloseRequest:
    uuid: str = ""
    account: str = ""

    @classmethod
    def from_json(cls, data: Any) -> AccountCloseRequest:
        body = _require_object(data)
        return cls(uuid=_get_str(body, "uuid"), account=_get_str(body, "account"))


@dataclass(frozen=True)
class AccountItem:
    """One account as shown in lists and in the account check."""

    id: int
    account: str
    name: str
    uuid: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "account": self.account,
            "name": self.name,
            "uuid": self.uuid,
        }


@dataclass(frozen=True)
class AccountLoginData:
    id: int
    account: str
    name: str
    token: str
    uuid: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "account": self.account,
            "name": self.name,
            "token": self.token,
            "uuid": self.uuid,
        }


@dataclass
class ListPage:
    """A page of a listing; an empty page serialises its list as null."""

    page: int
    page_size: int
    total: int
    items: list[AccountItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "list": [item.to_dict() for item in self.items] if self.items else None,
        }


def _body(code: int, desc: str) -> dict[str, Any]:
    return {"msgCode": code, "desc": desc}


def success_body(data: Any = None) -> dict[str, Any]:
    """Build a success envelope, with a data member when data is given."""
    body = _body(MSG_CODE_SUCCESS, MSG_DESC_SUCCESS)
    if data is not None:
        to_dict = getattr(data, "to_dict", None)
        body["data"] = to_dict() if callable(to_dict) else data
    return body


def fail_body(desc: str = MSG_DESC_FAIL) -> dict[str, Any]:
    """Build a failure envelope."""
    return _body(MSG_CODE_FAIL, desc)


def not_login_body() -> dict[str, Any]:
    """Build the envelope sent when no token is present."""
    return _body(MSG_CODE_NOT_LOGIN, MSG_DESC_NOT_LOGIN)