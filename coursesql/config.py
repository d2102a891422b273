"""
Configuration

Settings come from the environment (optionally a ``.env`` file).
Credentials are left to the OpenAI client, which reads its own
environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import GenerationError

DEFAULT_DB_PATH = "courses.sqlite3"
DEFAULT_MODEL = "gpt-4-turbo-preview"


@dataclass(frozen=True)
class Settings:
    db_path: str = DEFAULT_DB_PATH
    model: str = DEFAULT_MODEL
    schema_file: Optional[str] = None
    azure_endpoint: Optional[str] = None
    azure_api_key: Optional[str] = None
    azure_api_version: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            db_path=os.getenv("COURSESQL_DB", DEFAULT_DB_PATH),
            model=os.getenv("COURSESQL_MODEL") or os.getenv("AZURE_OPENAI_MODEL") or DEFAULT_MODEL,
            schema_file=os.getenv("COURSESQL_SCHEMA_FILE"),
            azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
            azure_api_key=os.getenv("AZURE_OPENAI_API_KEY"),
            azure_api_version=os.getenv("AZURE_OPENAI_API_VERSION"),
        )


def make_client(settings: Settings):
    """Build the async chat-completion client: Azure when an endpoint is configured"""
    from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

    try:
        if settings.azure_endpoint:
            return AsyncAzureOpenAI(
                azure_endpoint=settings.azure_endpoint,
                api_key=settings.azure_api_key,
                api_version=settings.azure_api_version,
            )
        return AsyncOpenAI()
    except (OpenAIError, ValueError) as e:
        raise GenerationError("Could not create the model service client") from e
