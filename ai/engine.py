"""Agent engine: Claude tool-use loop over the context tools."""

import asyncio
from typing import Any

import anthropic
import structlog

from ai.dispatcher import ToolDispatcher, ToolResult
from ai.prompts.system import BASE_SYSTEM_PROMPT
from ai.tools import CONTEXT_TOOLS
from config.constants import MAX_TOOL_RESULT_CHARS, MAX_TOOL_ROUNDS
from config.settings import settings

log = structlog.get_logger(__name__)


class ContextAgent:
    """Runs a prompt through Claude, letting it call the context tools."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        client: anthropic.AsyncAnthropic | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.client = client or anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.model = model or settings.agent_model
        self.max_tokens = max_tokens or settings.agent_max_tokens

    async def run(self, prompt: str, system_prompt: str | None = None) -> str:
        """Execute the tool-use loop until the model stops calling tools.

        Tools requested in the same round are executed in parallel.
        """
        messages: list[dict[str, Any]] = [{"role": "user", "content": prompt}]

        for round_num in range(MAX_TOOL_ROUNDS):
            try:
                async with self.client.messages.stream(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    system=system_prompt or BASE_SYSTEM_PROMPT,
                    messages=messages,
                    tools=CONTEXT_TOOLS,
                ) as stream:
                    response = await stream.get_final_message()
            except anthropic.APIError as e:
                log.error("anthropic_api_error", error=str(e), model=self.model)
                return f"Sorry, I encountered an API error: {e.message}"

            if response.stop_reason != "tool_use":
                text_parts = [block.text for block in response.content if block.type == "text"]
                return "\n".join(text_parts) if text_parts else "I wasn't able to generate a response."

            tool_blocks = [b for b in response.content if b.type == "tool_use"]
            log.debug("tool_round", round=round_num + 1, tools=[b.name for b in tool_blocks])
            results = await asyncio.gather(*[
                self.dispatcher.execute(block.name, block.input) for block in tool_blocks
            ])

            messages.append({"role": "assistant", "content": response.content})
            messages.append({
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": block.id,
                        "content": self._cap_result(result),
                        "is_error": result["is_error"],
                    }
                    for block, result in zip(tool_blocks, results)
                ],
            })

        return "I reached the maximum number of tool steps. Here's what I found so far."

    @staticmethod
    def _cap_result(result: ToolResult) -> str:
        """Flatten a tool result to text and truncate if too large."""
        text = "\n".join(block["text"] for block in result["content"])
        if len(text) > MAX_TOOL_RESULT_CHARS:
            removed = len(text) - MAX_TOOL_RESULT_CHARS
            return (
                text[:MAX_TOOL_RESULT_CHARS]
                + f"\n\n[TRUNCATED: {removed:,} characters removed. Load with a focus to narrow it down.]"
            )
        return text
