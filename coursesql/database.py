"""
Database Module

Read-only access to the course snapshot: opens the SQLite file, checks
that a statement is a single read query, executes it and converts every
value into a typed cell.
"""

import re
import sqlite3
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

import aiosqlite
from loguru import logger

from .errors import ConfigurationError, ExecutionError

_LINE_COMMENT_RE = re.compile(r"--[^\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_READ_STATEMENT_RE = re.compile(r"^\s*\(*\s*(SELECT|WITH)\b", re.IGNORECASE)


class CellKind(Enum):
    TEXT = "text"
    INTEGER = "integer"
    NULL = "null"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Cell:
    """A single result value tagged with its storage kind"""
    kind: CellKind
    value: Any = None

    @classmethod
    def from_value(cls, value: Any) -> "Cell":
        if value is None:
            return cls(CellKind.NULL)
        if isinstance(value, str):
            return cls(CellKind.TEXT, value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(CellKind.INTEGER, value)
        return cls(CellKind.UNSUPPORTED, value)

    @property
    def type_name(self) -> str:
        return type(self.value).__name__


@dataclass(frozen=True)
class ResultRow:
    """One result row: column names paired with cells, in select order"""
    columns: Tuple[str, ...]
    cells: Tuple[Cell, ...]

    def items(self) -> Iterator[Tuple[str, Cell]]:
        return iter(zip(self.columns, self.cells))

    def __getitem__(self, column: str) -> Cell:
        return self.cells[self.columns.index(column)]


def _strip_comments(sql: str) -> str:
    return _LINE_COMMENT_RE.sub("", _BLOCK_COMMENT_RE.sub("", sql))


def split_statements(sql: str) -> List[str]:
    """
    Split SQL text into its non-empty statements.

    Semicolons inside string literals or comments do not end a statement.
    """
    statements = []
    buffer = ""
    pieces = sql.split(";")
    for i, piece in enumerate(pieces):
        buffer += piece
        if i == len(pieces) - 1:
            break
        buffer += ";"
        if sqlite3.complete_statement(buffer):
            if _strip_comments(buffer).strip(" \t\r\n;"):
                statements.append(buffer.strip())
            buffer = ""
    if _strip_comments(buffer).strip(" \t\r\n;"):
        statements.append(buffer.strip())
    return statements


def check_read_statement(sql: str) -> None:
    """Reject anything other than exactly one SELECT (or WITH ... SELECT) statement"""
    statements = split_statements(sql)
    if not statements:
        raise ExecutionError("SQL query is empty")
    if len(statements) > 1:
        raise ExecutionError(f"Expected a single SQL statement, got {len(statements)}")
    statement = _strip_comments(statements[0]).strip()
    if not _READ_STATEMENT_RE.match(statement):
        keyword = statement.split(None, 1)[0]
        raise ExecutionError(f"Only SELECT queries are allowed, statement starts with '{keyword}'")


class CourseDatabase:
    """
    Read-only connection to the course snapshot.

    Use as an async context manager; the connection is opened on entry
    and closed on exit.
    """

    def __init__(self, db_path: str, select_only: bool = True):
        self.db_path = Path(db_path)
        self.select_only = select_only
        self._conn: Optional[aiosqlite.Connection] = None

    async def __aenter__(self) -> "CourseDatabase":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def connect(self) -> aiosqlite.Connection:
        """Open the database file read-only"""
        if self._conn is None:
            uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
            logger.debug(f"Opening {uri}")
            try:
                self._conn = await aiosqlite.connect(uri, uri=True)
            except sqlite3.Error as e:
                raise ConfigurationError(f"Could not open database {self.db_path}") from e
        return self._conn

    async def execute_query(self, sql: str) -> List[ResultRow]:
        """
        Execute one statement and materialize all of its rows.

        Returns:
            Result rows in the order the database produced them
        """
        if self.select_only:
            check_read_statement(sql)

        conn = await self.connect()
        try:
            async with conn.execute(sql) as cursor:
                records = await cursor.fetchall()
                description = cursor.description or ()
        except (sqlite3.Error, sqlite3.Warning) as e:
            raise ExecutionError(f"Failed to execute SQL query: {e}") from e

        columns = tuple(d[0] for d in description)
        logger.debug(f"Query returned {len(records)} rows")
        return [
            ResultRow(columns=columns, cells=tuple(Cell.from_value(v) for v in record))
            for record in records
        ]

    async def close(self) -> None:
        """Close database connection"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
