from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Optional

import mysql.connector

from ..common.datetime_utils import now_utc
from ..core.exceptions import StoreUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .client import DocumentClient, DocumentPath, collection_key, deep_merge, split_document_path

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(action: str):
    try:
        yield
    except mysql.connector.Error as e:
        logger.error("Document store %s failed: %s", action, e)
        raise StoreUnavailable(f"Document store {action} failed") from e


def _load(raw: Any) -> dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        return json.loads(raw)
    return dict(raw or {})


class MySQLDocumentClient(DocumentClient):
    """Document store over a single ``documents`` table with a JSON column."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_document(self, path: DocumentPath) -> Optional[dict[str, Any]]:
        collection, doc_id = split_document_path(path)
        with _translate_errors("read"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT data FROM documents WHERE collection_path=%s AND doc_id=%s",
                (collection, doc_id),
            )
            row = fetchone(cur)
            return _load(row["data"]) if row else None

    def list_documents(self, collection: DocumentPath) -> list[tuple[str, dict[str, Any]]]:
        with _translate_errors("list"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT doc_id, data
                FROM documents
                WHERE collection_path=%s
                ORDER BY doc_id ASC
                """,
                (collection_key(collection),),
            )
            return [(str(r["doc_id"]), _load(r["data"])) for r in fetchall(cur)]

    def set_document(self, path: DocumentPath, data: dict[str, Any], *, merge: bool = False) -> None:
        collection, doc_id = split_document_path(path)
        with _translate_errors("write"), db_cursor(self._conn_factory) as (_, cur):
            if merge:
                cur.execute(
                    "SELECT data FROM documents WHERE collection_path=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                row = fetchone(cur)
                if row:
                    data = deep_merge(_load(row["data"]), data)

            cur.execute(
                """
                INSERT INTO documents(collection_path, doc_id, data)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE data=VALUES(data)
                """,
                (collection, doc_id, json.dumps(data, ensure_ascii=False)),
            )

    def delete_document(self, path: DocumentPath) -> None:
        collection, doc_id = split_document_path(path)
        with _translate_errors("delete"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM documents WHERE collection_path=%s AND doc_id=%s",
                (collection, doc_id),
            )

    def server_timestamp(self) -> datetime:
        # Client clock in UTC; every writer stamps with the same source.
        return now_utc()
