"""Read-mostly Firestore REST client (no firebase-admin).

Service-account tokens come from google-auth; requests go to Firestore REST
v1 through one shared httpx.AsyncClient. Against the local emulator no token
is minted: the emulator accepts the fixed "owner" bearer token.

Surface used by the repositories:
- collection(name).document(id).get() / .update(fields)
- collection(name).where(...).order_by(...).start_after(...).limit(n).stream()
- collection(name).stream() (full listing, follows page tokens)
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import httpx

from cuisine.infrastructure.firebase._rest_encoding import (
    Reference,
    _encode_value,
    decode_document,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
FIRESTORE_API_URL = "https://firestore.googleapis.com/v1"
DEFAULT_DATABASE = "(default)"
_EMULATOR_TOKEN = "owner"
_LIST_PAGE_SIZE = 300

# Pseudo-field for ordering by document ID (tiebreak for cursors).
DOCUMENT_ID_FIELD = "__name__"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    if not credentials.valid:
        from google.auth.transport.requests import Request

        credentials.refresh(Request())
    return credentials.token


class FirestoreRESTClient:
    """Firestore database handle over REST.

    Args:
        project_id: GCP project of the database.
        credentials: google-auth credentials, or None for the emulator.
        database: Database ID ("(default)" unless a named database is used).
        base_url: API root; http://<FIRESTORE_EMULATOR_HOST>/v1 for the emulator.
        http_client: Injected client (tests); closed by its owner, not here.
    """

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        database: str = DEFAULT_DATABASE,
        base_url: str = FIRESTORE_API_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.project_id = project_id
        self._credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.documents_path = f"projects/{project_id}/databases/{database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in a worker thread (blocking I/O)."""
        if self._credentials is None:
            return _EMULATOR_TOKEN
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self.documents_path}/{collection_id}")

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: dict | None = None,
        params: dict | list | None = None,
    ) -> Any:
        """Send one authenticated request; 404 returns None, other errors raise.

        Raises:
            httpx.HTTPStatusError: non-2xx status other than 404.
            httpx.TransportError: connection or timeout failure.
        """
        headers = {"Authorization": f"Bearer {await self.get_token()}"}
        resp = await self._http.request(
            method, f"{self.base_url}/{path}", headers=headers, json=body, params=params
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json() if resp.content else {}


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    @classmethod
    def from_document(cls, doc: dict) -> DocumentSnapshot:
        """Build from a REST Document resource ({"name": ..., "fields": ...})."""
        name = doc.get("name", "")
        return cls(name.rsplit("/", 1)[-1], decode_document(doc.get("fields")))

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; None if it does not exist."""
        out = await self._client.request("GET", self._path)
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))

    async def update(self, data: dict[str, Any]) -> None:
        """Overwrite only the given top-level fields of an existing document."""
        params = [("updateMask.fieldPaths", name) for name in data]
        params.append(("currentDocument.exists", "true"))
        await self._client.request(
            "PATCH", self._path, body=encode_document(data), params=params
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "array-contains": "ARRAY_CONTAINS",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}


class _Query:
    """Fluent structured query over one collection, run with runQuery.

    Filters are ANDed. Orderings apply in the order they were added.
    start_after() takes one value per ordering (results strictly after it).
    """

    def __init__(self, client: FirestoreRESTClient, parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._orders: list[tuple[str, str]] = []
        self._start_after: tuple[Any, ...] | None = None
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> _Query:
        if op not in _OP_MAP:
            raise ValueError(f"Unsupported query operator: {op!r}")
        self._filters.append((field, _OP_MAP[op], value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        self._orders.append((field, direction))
        return self

    def start_after(self, *values: Any) -> _Query:
        self._start_after = values
        return self

    def limit(self, n: int) -> _Query:
        self._limit = n
        return self

    def document_reference(self, document_id: str) -> Reference:
        """Reference value for a document of this collection (for __name__ cursors)."""
        return Reference(f"{self._parent}/{self._collection_id}/{document_id}")

    def to_structured_query(self) -> dict[str, Any]:
        """Build the runQuery structuredQuery body."""
        structured: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        field_filters = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": op,
                    "value": _encode_value(value),
                }
            }
            for field, op, value in self._filters
        ]
        if len(field_filters) == 1:
            structured["where"] = field_filters[0]
        elif field_filters:
            structured["where"] = {"compositeFilter": {"op": "AND", "filters": field_filters}}
        if self._orders:
            structured["orderBy"] = [
                {"field": {"fieldPath": field}, "direction": direction}
                for field, direction in self._orders
            ]
        if self._start_after is not None:
            structured["startAt"] = {
                "values": [_encode_value(v) for v in self._start_after],
                "before": False,
            }
        if self._limit is not None:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Run the query and yield matching documents in order."""
        rows = await self._client.request(
            "POST",
            f"{self._parent}:runQuery",
            body={"structuredQuery": self.to_structured_query()},
        )
        # runQuery answers with a list of partial results; some carry only readTime.
        for row in rows or []:
            if "document" in row:
                yield DocumentSnapshot.from_document(row["document"])


class CollectionReference:
    """Reference to a collection."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    def _query(self) -> _Query:
        return _Query(self._client, self._path.rsplit("/", 1)[0], self.id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a filtered query. Chain .where(), .order_by(), .limit(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        """Start an unfiltered, ordered query."""
        return self._query().order_by(field, direction)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection, following page tokens."""
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"pageSize": _LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            out = await self._client.request("GET", self._path, params=params)
            if not out:
                return
            for doc in out.get("documents", []):
                yield DocumentSnapshot.from_document(doc)
            page_token = out.get("nextPageToken")
            if not page_token:
                return
