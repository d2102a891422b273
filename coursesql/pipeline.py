"""
Question Pipeline

Connect, build the prompt, generate SQL, sanitize, execute, render.
Each stage raises its own error and nothing is retried.
"""

import sys
from typing import Optional

from loguru import logger

from .database import CourseDatabase
from .generator import generate_sql
from .prompt import build_conversation
from .renderer import render_table
from .sanitizer import sanitize_sql
from .schema import load_schema_descriptor


async def answer_question(
    question: str,
    *,
    db_path: str,
    model: str,
    client,
    verbose: bool = False,
    schema: Optional[str] = None,
) -> str:
    """
    Answer one question about course registration.

    Args:
        question: Natural language question, passed to the model verbatim
        db_path: SQLite snapshot, opened read-only
        model: Chat model or deployment name
        client: Async chat-completion client
        verbose: Print the sanitized SQL to stderr before running it
        schema: Schema descriptor text (defaults to the bundled one)

    Returns:
        The rendered result table
    """
    if schema is None:
        schema = load_schema_descriptor()

    async with CourseDatabase(db_path) as db:
        conversation = build_conversation(schema, question)
        raw_sql = await generate_sql(client, conversation, model)
        sql = sanitize_sql(raw_sql)

        if verbose:
            print(sql, file=sys.stderr)

        rows = await db.execute_query(sql)

    logger.debug(f"Rendering {len(rows)} rows")
    return render_table(rows)
