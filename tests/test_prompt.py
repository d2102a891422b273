import dataclasses

import pytest

from coursesql.prompt import OUTPUT_DIRECTIVE, Role, build_conversation
from coursesql.schema import load_schema_descriptor


def test_three_turns_in_order():
    question = "What CS courses are open for Fall 2024?"
    conversation = build_conversation(load_schema_descriptor(), question)

    assert len(conversation) == 3
    assert conversation.roles == [Role.SYSTEM, Role.USER, Role.SYSTEM]
    assert conversation.turns[1].content == question
    assert conversation.turns[2].content == OUTPUT_DIRECTIVE


def test_instructions_embed_schema_verbatim():
    schema = "CREATE TABLE sections (crn text); -- {not a placeholder}"
    instructions = build_conversation(schema, "q").turns[0].content

    assert schema in instructions
    assert "CRN" in instructions
    assert "enrollment" in instructions
    assert "Atlanta" in instructions
    assert "'CS 1331'" in instructions
    assert "CS 8803 ANI" in instructions


def test_empty_question_passes_through():
    conversation = build_conversation("schema", "")
    assert conversation.turns[1].content == ""


def test_to_messages():
    messages = build_conversation("schema", "Who teaches CS 1331?").to_messages()

    assert [m["role"] for m in messages] == ["system", "user", "system"]
    assert messages[1] == {"role": "user", "content": "Who teaches CS 1331?"}


def test_conversation_is_immutable():
    conversation = build_conversation("schema", "q")
    with pytest.raises(dataclasses.FrozenInstanceError):
        conversation.turns[0].content = "changed"


def test_bundled_schema_describes_all_tables():
    schema = load_schema_descriptor()
    for table in ("sections", "faculty", "course_faculty"):
        assert f"CREATE TABLE {table}" in schema
    assert "'Georgia Tech-Atlanta *'" in schema
    assert "'Lecture*'" in schema
