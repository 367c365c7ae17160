"""OpenAI Chat Completions client for nutrition estimates."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrition_analysis.services.nutrition import NutritionEstimator


@dataclass
class OpenAINutritionClient(NutritionEstimator):
    """Nutrition estimator backed by OpenAI chat completions in JSON mode."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAINutritionClient":
        """Create an OpenAI nutrition client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Request a JSON completion and return the first choice's text."""
        response = await self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
