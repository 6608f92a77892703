# sessiondemo

A small HTTP service for managing user accounts, built on Flask. Accounts
are kept in a SQLite file. Every answer is a JSON object with a `msgCode`
and a `desc` member; some answers also carry a `data` member. The HTTP
status is always 200; the outcome is told by `msgCode` alone.

## Installing

```
pip install .
```

With the test tools:

```
pip install ".[test]"
```

## Running

```
sessiondemo
```

Options:

- `--host` — address to listen on (default `0.0.0.0`)
- `--port` — port to listen on (default `8080`)
- `--db` — path of the SQLite file (default `sessiondemo.db`)

On start the database is opened and the `account` table is created if it
is missing. If the database cannot be opened, `数据库初始化链接失败` is
printed and the server starts anyway.

## Endpoints

All routes are `GET` routes under `/api/v1/account`. Parameters are read
from a JSON body sent with the request.

| Route       | Token header | Body fields                 |
|-------------|--------------|-----------------------------|
| `/register` | no           | `name`, `account`           |
| `/login`    | no           | `account`                   |
| `/list`     | yes          | `page`, `pageSize`, `name`  |
| `/edit`     | yes          | `uuid`, `name`, `account`   |
| `/logout`   | yes          |                             |
| `/check`    | yes          |                             |
| `/close`    | yes          | `uuid`, `account`           |

What each route does:

- `/register` creates an account with a new time-based UUID.
- `/login` looks up the first live account with the given `account` and
  returns its `id`, `account`, `name`, `uuid` and a freshly generated
  `token`. A body that is missing or not a JSON object is a failure.
- `/list` returns live accounts ordered by id; `page` is used as the number
  of rows to skip and `pageSize` as the number of rows to return. `total`
  is always 100, and `list` is `null` when no account is found.
- `/edit` sets `name` and `account` of the live account with the given
  `uuid`.
- `/logout` answers `{"msgCode": 200, "desc": "成功"}`.
- `/check` returns the first live account. The value of the token is not
  compared with anything.
- `/close` marks the account matching both `uuid` and `account` as deleted
  (a soft delete: the row stays, with `deleted_at` set). On failure the
  `desc` holds the reason.

Routes that need a token only check that a non-empty `Token` header is
present; without one the answer is `{"msgCode": 101, "desc": "未登录"}`.

## Result codes

- `100` success (`成功`)
- `200` failure (`失败`, or the reason for a failed close)
- `101` not logged in (`未登录`)

## Using it from Python

```python
from sessiondemo.app import create_app
from sessiondemo.database import Database

db = Database(":memory:")
db.migrate()
app = create_app(db)
client = app.test_client()
client.get("/api/v1/account/register", json={"name": "Ann", "account": "ann"})
```

Without a database argument, `create_app` uses the shared handle from
`sessiondemo.database.init_db`, which opens and migrates the database on
first use; `reset_db` closes and forgets it.

Modules:

- `sessiondemo.app` — `create_app`, the `token_required` decorator,
  `demo_a` and `main`.
- `sessiondemo.services` — `AccountService` with `list`, `register`,
  `login`, `edit_info`, `info`, `close` and the lower-level `find`,
  `first`, `create`, `updates` and `delete`; failures raise
  `ServiceError`.
- `sessiondemo.database` — `Database`, `AccountModel`, `init_db`,
  `reset_db` and `DatabaseError`.
- `sessiondemo.schemas` — request shapes with `from_json`, response shapes
  with `to_dict`, the envelope builders `success_body`, `fail_body` and
  `not_login_body`, and the status codes.
- `sessiondemo.logs` — `print_log`, which prints a message together with
  the name of the calling function.

## What it does not do

There are no real sessions. The token returned by `/login` is not stored,
protected routes accept any non-empty `Token` header, and `/logout` changes
nothing. There is no password or other credential check.