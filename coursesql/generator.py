"""
Query Generator

Sends the conversation to a chat-completion model and returns its reply.
"""

import openai
from loguru import logger

from .errors import GenerationError
from .prompt import Conversation


async def generate_sql(client, conversation: Conversation, model: str) -> str:
    """
    Ask the model for a SQL query.

    Args:
        client: An ``openai.AsyncOpenAI`` (or Azure) client
        conversation: Prompt built by ``build_conversation``
        model: Model or deployment name

    Returns:
        Text of the first choice, stripped of surrounding whitespace
    """
    logger.debug(f"Requesting completion from {model} ({len(conversation)} turns)")

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=conversation.to_messages(),
        )
    except openai.OpenAIError as e:
        raise GenerationError("Failed to get a completion from the model service") from e

    if not response.choices:
        raise GenerationError("Model service returned no choices")

    content = response.choices[0].message.content
    if content is None or not content.strip():
        raise GenerationError("Model service returned an empty response")

    return content.strip()
