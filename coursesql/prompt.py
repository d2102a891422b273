"""
Prompt Builder

Assembles the three-turn conversation sent to the chat model:
instructions with the schema, the student's question, and the
output-format directive.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"


@dataclass(frozen=True)
class Turn:
    """One message of the conversation"""
    role: Role
    content: str


@dataclass(frozen=True)
class Conversation:
    """Ordered, immutable sequence of turns"""
    turns: Tuple[Turn, ...]

    def __len__(self) -> int:
        return len(self.turns)

    def __iter__(self):
        return iter(self.turns)

    @property
    def roles(self) -> List[Role]:
        return [turn.role for turn in self.turns]

    def to_messages(self) -> List[Dict[str, str]]:
        """Chat-completion message payload"""
        return [{"role": turn.role.value, "content": turn.content} for turn in self.turns]


INSTRUCTIONS_TEMPLATE = """
You are an assistant that helps students with course registration at Georgia Tech. You can query a SQLite database of the sections currently available for registration. Your job is to write a query against that database that answers the student's question. Be very selective about the columns you select: include only the information needed to answer the question. Always include the CRN when it makes sense to do so. Do NOT include enrollment information unless the student asks for it.

Assume the student is enrolled at the Atlanta campus and is only interested in sections they can take in person.

When a student mentions a course like 'CS 1331', they mean subject 'CS' and course number '1331'. When a student mentions 'CS 8803 ANI', they mean the 'ANI' section of CS 8803.

Database schema:
```sql
{schema}
```

The next message contains the student's question. Read it carefully:
""".strip()

OUTPUT_DIRECTIVE = (
    "Write a single SQL query that answers the question above. Think carefully before "
    "responding. Reply with ONLY the text of the SQL query and nothing else, or it "
    "cannot be run."
)


def build_conversation(schema: str, question: str) -> Conversation:
    """
    Build the conversation for one question.

    The question is passed through verbatim; an empty or nonsensical
    question only fails later, when the generated SQL is executed.
    """
    return Conversation(turns=(
        Turn(Role.SYSTEM, INSTRUCTIONS_TEMPLATE.format(schema=schema)),
        Turn(Role.USER, question),
        Turn(Role.SYSTEM, OUTPUT_DIRECTIVE),
    ))
