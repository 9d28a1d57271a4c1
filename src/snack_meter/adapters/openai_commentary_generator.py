"""OpenAI Responses API backend for snack commentary."""

from dataclasses import dataclass
from http import HTTPStatus

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from snack_meter.domain.errors import CommentaryUnavailableError, RateLimitedError
from snack_meter.domain.snacks import SnackType
from snack_meter.services.commentary import (
    CommentaryGenerator,
    build_commentary_prompt,
)


@dataclass
class OpenAICommentaryGenerator(CommentaryGenerator):
    """Commentary generator backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, model: str, store: bool = False
    ) -> "OpenAICommentaryGenerator":
        """Create an OpenAI commentary generator."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model, store=store)

    async def comment(
        self, snack_type: SnackType, new_area: float, largest_area: float
    ) -> str:
        """Ask the model for a one-line remark about the snack."""
        prompt = build_commentary_prompt(snack_type, new_area, largest_area)
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=prompt,
                store=self.store,
            )
        except APIStatusError as exc:
            if exc.status_code == HTTPStatus.TOO_MANY_REQUESTS:
                raise RateLimitedError(str(exc), status_code=exc.status_code) from exc
            raise CommentaryUnavailableError(
                str(exc), status_code=exc.status_code
            ) from exc
        except APIConnectionError as exc:
            raise CommentaryUnavailableError(str(exc)) from exc
        output_text = (response.output_text or "").strip()
        if not output_text:
            raise CommentaryUnavailableError("OpenAI returned an empty response")
        return output_text
