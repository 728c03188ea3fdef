"""
E-TernakID - LLM Client.

Wraps OpenAI with Instructor for schema-validated structured outputs.
All LLM calls go through here so they share retries and prompt logging.
"""

from typing import TypeVar

import instructor
from openai import OpenAI
from pydantic import BaseModel

from eternak.config import settings
from eternak.llm.prompt_logger import log_prompt

T = TypeVar("T", bound=BaseModel)

# Singleton client instance
_client: instructor.Instructor | None = None


def get_client() -> instructor.Instructor:
    """
    Get the Instructor-wrapped OpenAI client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        openai_client = OpenAI(api_key=settings.openai_api_key)
        _client = instructor.from_openai(openai_client)

    return _client


async def call_llm(
    *,
    response_model: type[T],
    system_prompt: str,
    user_prompt: str,
    node: str = "llm",
    max_retries: int | None = None,
) -> T:
    """
    Make a structured LLM call.

    Instructor re-asks the model (up to `max_retries`) until the response
    validates against `response_model`. Errors are logged and re-raised.

    Example:
        result = await call_llm(
            response_model=PredictLivestockHealthOutput,
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_user_prompt(input),
            node="health_prediction",
        )
    """
    client = get_client()
    model = settings.openai_model
    temperature = settings.llm_temperature

    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]

    try:
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            response_model=response_model,
            max_retries=settings.llm_max_retries if max_retries is None else max_retries,
            temperature=temperature,
        )

        log_prompt(
            node=node,
            model=model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_model=response_model.__name__,
            response=response,
            temperature=temperature,
        )

        return response

    except Exception as e:
        log_prompt(
            node=node,
            model=model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response_model=response_model.__name__,
            error=str(e),
            temperature=temperature,
        )
        raise
