"""
SQL Sanitizer

Removes markdown code-fence lines from model output. No SQL validation
happens here; statement checks belong to the database layer.
"""

FENCE_MARKER = "```"


def sanitize_sql(text: str) -> str:
    """Drop every line that starts with a code fence and rejoin the rest in order"""
    return "\n".join(
        line for line in text.split("\n")
        if not line.strip().startswith(FENCE_MARKER)
    )
