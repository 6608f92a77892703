"""Account operations on top of the account table."""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from sessiondemo.database import TABLE_NAME, AccountModel, Database, DatabaseError, init_db
from sessiondemo.schemas import (
    AccountCloseRequest,
    AccountEditInfoRequest,
    AccountItem,
    AccountListRequest,
    AccountLoginRequest,
    AccountRegisterRequest,
)

_UPDATABLE_COLUMNS = frozenset({"uuid", "name", "account"})


class ServiceError(Exception):
    """Raised when an account operation fails."""


def _where(condition: str) -> str:
    """Combine a condition with the filter that hides soft-deleted rows."""
    if condition:
        return f"({condition}) AND deleted_at = 0"
    return "deleted_at = 0"


def _item(model: AccountModel) -> AccountItem:
    return AccountItem(
        id=model.id,
        account=model.account,
        name=model.name,
        uuid=str(model.uuid),
    )


class AccountService:
    """Registers, finds, edits and closes accounts."""

    def __init__(self, database: Database | None = None) -> None:
        self._database = database

    def _db(self, message: str = "数据库连接失败") -> Database:
        if self._database is not None:
            return self._database
        try:
            return init_db()
        except DatabaseError as exc:
            raise ServiceError(message) from exc

    def list(self, params: AccountListRequest) -> list[AccountItem]:
        """List live accounts, skipping `page` rows and taking `page_size`."""
        self._db("数据库失败")
        return [_item(model) for model in self.find(params.page, params.page_size)]

    def register(self, params: AccountRegisterRequest) -> AccountModel:
        """Create an account with a fresh UUID."""
        self._db()
        try:
            return self.create(params.name, params.account)
        except ServiceError as exc:
            raise ServiceError("新增失败") from exc

    def login(self, params: AccountLoginRequest) -> AccountModel:
        """Return the first live account with the given account name."""
        self._db()
        model = self.first("account = ?", [params.account])
        if model is None:
            raise ServiceError("查询账户失败")
        return model

    def edit_info(self, params: AccountEditInfoRequest) -> None:
        """Set name and account of the live account with the given UUID."""
        self._db()
        self.updates(
            "uuid = ?",
            [params.uuid],
            {"name": params.name, "account": params.account},
        )

    def info(self, token: str) -> AccountItem:
        """Return the first live account; the token is not matched against it."""
        self._db()
        model = self.first("", ())
        if model is None:
            raise ServiceError("未找到用户信息")
        return _item(model)

    def close(self, params: AccountCloseRequest) -> None:
        """Soft-delete the live account matching both UUID and account name."""
        self._db()
        try:
            self.delete("uuid = ? AND account = ?", [params.uuid, params.account])
        except ServiceError as exc:
            raise ServiceError("删除失败") from exc

    def find(self, page: int, page_size: int) -> list[AccountModel]:
        """Return live accounts with `page` as offset and `page_size` as limit."""
        db = self._db()
        limit = page_size if page_size >= 0 else -1
        offset = max(page, 0)
        try:
            rows = db.query(
                f"SELECT * FROM {TABLE_NAME} WHERE deleted_at = 0 "
                "ORDER BY id LIMIT ? OFFSET ?",
                (limit, offset),
            )
        except DatabaseError:
            return []
        return [AccountModel.from_row(row) for row in rows]

    def first(self, condition: str, values: Iterable[Any] = ()) -> AccountModel | None:
        """Return the live account with the lowest id matching the condition."""
        db = self._db()
        try:
            rows = db.query(
                f"SELECT * FROM {TABLE_NAME} WHERE {_where(condition)} ORDER BY id LIMIT 1",
                values,
            )
        except DatabaseError:
            return None
        return AccountModel.from_row(rows[0]) if rows else None

    def create(self, name: str, account: str) -> AccountModel:
        """Insert an account with a new time-based UUID and return it."""
        db = self._db()
        account_uuid = str(uuid.uuid1())
        now = int(time.time())
        try:
            affected = db.execute(
                f"INSERT INTO {TABLE_NAME} (uuid, name, account, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (account_uuid, name, account, now, now),
            )
        except DatabaseError as exc:
            raise ServiceError("创建失败") from exc
        if affected == 0:
            raise ServiceError("创建失败")
        model = self.first("uuid = ?", [account_uuid])
        if model is None:
            raise ServiceError("创建失败")
        return model

    def updates(
        self, condition: str, values: Iterable[Any], fields: Mapping[str, Any]
    ) -> None:
        """Update the given columns of matching live accounts."""
        db = self._db()
        columns = [key.lower() for key in fields]
        unknown = [key for key in columns if key not in _UPDATABLE_COLUMNS]
        if unknown or not columns:
            raise ServiceError("更新失败")
        assignments = ", ".join(f"{column} = ?" for column in columns)
        params = [*fields.values(), int(time.time()), *values]
        try:
            affected = db.execute(
                f"UPDATE {TABLE_NAME} SET {assignments}, updated_at = ? "
                f"WHERE {_where(condition)}",
                params,
            )
        except DatabaseError as exc:
            raise ServiceError("更新失败") from exc
        if affected == 0:
            raise ServiceError("更新失败")

    def delete(self, condition: str, values: Iterable[Any]) -> None:
        """Soft-delete matching live accounts by stamping deleted_at."""
        db = self._db()
        try:
            affected = db.execute(
                f"UPDATE {TABLE_NAME} SET deleted_at = ? WHERE {_where(condition)}",
                [int(time.time()), *values],
            )
        except DatabaseError as exc:
            raise ServiceError("删除失败") from exc
        if affected == 0:
            raise ServiceError("删除失败")