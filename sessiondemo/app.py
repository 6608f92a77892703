"""HTTP routes of the account API."""

from __future__ import annotations

import argparse
import functools
import uuid
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from flask import Flask, request

from sessiondemo.database import DEFAULT_PATH, Database, DatabaseError, init_db
from sessiondemo.logs import print_log
from sessiondemo.schemas import (
    HTTP_CODE_SUCCESS,
    MSG_DESC_SUCCESS,
    AccountCloseRequest,
    AccountEditInfoRequest,
    AccountListRequest,
    AccountLoginData,
    AccountLoginRequest,
    AccountRegisterRequest,
    BindError,
    ListPage,
    fail_body,
    not_login_body,
    success_body,
)
from sessiondemo.services import AccountService, ServiceError

_Request = TypeVar("_Request")

LIST_TOTAL = 100


def token_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Answer with the not-logged-in envelope when no Token header is sent."""

    @functools.wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not request.headers.get("Token"):
            return not_login_body(), HTTP_CODE_SUCCESS
        return view(*args, **kwargs)

    return wrapper


def demo_a() -> dict[str, str]:
    """A demonstration handler that logs its caller."""
    print_log("这是 demo-main")
    return {"A": "1"}


def _bind(shape: type[_Request], strict: bool = False) -> _Request:
    data = request.get_json(force=True, silent=True)
    try:
        return shape.from_json(data)  # type: ignore[attr-defined]
    except BindError:
        if strict:
            raise
        return shape()


def create_app(database: Database | None = None) -> Flask:
    """Build the application; without a database the shared one is used."""
    app = Flask(__name__)
    app.json.ensure_ascii = False  # type: ignore[attr-defined]
    service = AccountService(database)

    @app.get("/api/v1/account/register")
    def register() -> Any:
        req = _bind(AccountRegisterRequest)
        try:
            service.register(req)
        except ServiceError:
            return fail_body(), HTTP_CODE_SUCCESS
        return success_body(), HTTP_CODE_SUCCESS

    @app.get("/api/v1/account/login")
    def login() -> Any:
        try:
            req = _bind(AccountLoginRequest, strict=True)
            model = service.login(req)
        except (BindError, ServiceError):
            return fail_body(), HTTP_CODE_SUCCESS
        data = AccountLoginData(
            id=model.id,
            account=model.account,
            name=model.name,
            token=str(uuid.uuid1()),
            uuid=str(model.uuid),
        )
        return success_body(data), HTTP_CODE_SUCCESS

    @app.get("/api/v1/account/list")
    @token_required
    def account_list() -> Any:
        req = _bind(AccountListRequest)
        try:
            items = service.list(req)
        except ServiceError:
            return fail_body(), HTTP_CODE_SUCCESS
        page = ListPage(page=req.page, page_size=req.page_size, total=LIST_TOTAL, items=items)
        return success_body(page), HTTP_CODE_SUCCESS

    @app.get("/api/v1/account/edit")
    @token_required
    def edit() -> Any:
        req = _bind(AccountEditInfoRequest)
        try:
            service.edit_info(req)
        except ServiceError:
            return fail_body(), HTTP_CODE_SUCCESS
        return success_body(), HTTP_CODE_SUCCESS

    @app.get("/api/v1/account/logout")
    @token_required
    def logout() -> Any:
        return {"msgCode": HTTP_CODE_SUCCESS, "desc": MSG_DESC_SUCCESS}, HTTP_CODE_SUCCESS

    @app.get("/api/v1/account/check")
    @token_required
    def check() -> Any:
        try:
            item = service.info(request.headers.get("Token", ""))
        except ServiceError:
            return fail_body(), HTTP_CODE_SUCCESS
        return success_body(item), HTTP_CODE_SUCCESS

    @app.get("/api/v1/account/close")
    @token_required
    def close() -> Any:
        req = _bind(AccountCloseRequest)
        try:
            service.close(req)
        except ServiceError as exc:
            return fail_body(str(exc)), HTTP_CODE_SUCCESS
        return success_body(), HTTP_CODE_SUCCESS

    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Open the database and serve the API."""
    parser = argparse.ArgumentParser(description="Serve the account API.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--db", default=DEFAULT_PATH, help="path of the SQLite file")
    args = parser.parse_args(argv)

    database: Database | None
    try:
        database = init_db(args.db)
    except DatabaseError:
        print("数据库初始化链接失败")
        database = None

    app = create_app(database)
    app.run(host=args.host, port=args.port)
    return 0