"""A small FastAPI stand-in for the ONERP gateway used by integration tests.

Implements cursor pagination, CRUD and error envelopes the way the gateway
does for ``/onerp/bank-accounts`` and ``/onerp/cities``.
"""

from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

VALID_TOKEN = "integration-token"


def build_app(rows: int = 23) -> FastAPI:
    app = FastAPI()
    accounts: list[dict[str, Any]] = [
        {"bank_account_id": f"BA{i:03d}", "account_number": f"000{i}", "bank_name": "Banco Uno"}
        for i in range(rows)
    ]
    cities = [
        {"id": 1, "name": "Bogotá", "code": "BOG", "dane_code": "11001", "is_capital": True},
        {"id": 2, "name": "Medellín", "code": "MDE", "dane_code": "05001", "is_capital": False},
        {"id": 3, "name": "Bucaramanga", "code": "BGA", "dane_code": "68001", "is_capital": False},
    ]
    app.state.accounts = accounts

    async def require_token(authorization: str | None = Header(None)) -> None:
        if authorization != f"Bearer {VALID_TOKEN}":
            raise HTTPException(status_code=401, detail="Unauthorized")

    @app.exception_handler(HTTPException)
    async def error_envelope(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"statusCode": exc.status_code, "message": exc.detail},
        )

    def paginate(records: list[dict[str, Any]], id_field: str, body: dict[str, Any]) -> dict:
        limit = int(body.get("limit", 10))
        ids = [record[id_field] for record in records]
        if body.get("afterCursor") is not None:
            cursor = body["afterCursor"]
            start = ids.index(cursor) + 1 if cursor in ids else len(records)
        elif body.get("beforeCursor") is not None:
            cursor = body["beforeCursor"]
            start = max((ids.index(cursor) if cursor in ids else 0) - limit, 0)
        else:
            start = 0
        data = records[start : start + limit]
        return {
            "data": data,
            "pageCount": -(-len(records) // limit),
            "rowCount": len(records),
            "pageInfo": {
                "limit": limit,
                "hasNextPage": start + limit < len(records),
                "hasPreviousPage": start > 0,
                "startCursor": data[0][id_field] if data else None,
                "endCursor": data[-1][id_field] if data else None,
            },
        }

    @app.post("/onerp/bank-accounts/pagination", dependencies=[Depends(require_token)])
    async def bank_account_page(body: dict[str, Any]) -> dict:
        return paginate(accounts, "bank_account_id", body)

    @app.post("/onerp/bank-accounts", dependencies=[Depends(require_token)])
    async def create_bank_account(body: dict[str, Any]) -> JSONResponse:
        if not body.get("account_number"):
            return JSONResponse(
                status_code=400,
                content={"statusCode": 422, "message": ["account_number should not be empty"]},
            )
        record = {"bank_account_id": f"BA{len(accounts) + 100:03d}", **body}
        accounts.insert(0, record)
        return JSONResponse(status_code=201, content=record)

    @app.delete("/onerp/bank-accounts/{account_id}", dependencies=[Depends(require_token)])
    async def delete_bank_account(account_id: str) -> None:
        for index, record in enumerate(accounts):
            if record["bank_account_id"] == account_id:
                del accounts[index]
                return None
        raise HTTPException(status_code=404, detail=f"Bank account {account_id} not found")

    @app.get("/onerp/cities", dependencies=[Depends(require_token)])
    async def list_cities() -> list[dict]:
        return cities

    @app.post("/onerp/cities/pagination", dependencies=[Depends(require_token)])
    async def search_cities(body: dict[str, Any]) -> dict:
        term = str(body.get("search", "")).lower()
        matches = [
            city
            for city in cities
            if term in city["name"].lower() or term in city["code"].lower() or term in city["dane_code"]
        ]
        return paginate(matches, "id", body)

    return app
