"""Route tool calls to the context manager."""

from typing import Any, TypedDict

import structlog
from pydantic import ValidationError

from ai.tools import CONTEXT_TOOLS
from context import templates
from context.manager import ContextManager
from context.models import ContextUpdate

log = structlog.get_logger(__name__)


class TextBlock(TypedDict):
    type: str
    text: str


class ToolResult(TypedDict):
    content: list[TextBlock]
    is_error: bool


def text_result(text: str, is_error: bool = False) -> ToolResult:
    return {"content": [{"type": "text", "text": text}], "is_error": is_error}


class ToolDispatcher:
    """Executes the context tools by name. Never raises."""

    def __init__(self, manager: ContextManager) -> None:
        self.manager = manager

    @staticmethod
    def list_tools() -> list[dict[str, Any]]:
        return CONTEXT_TOOLS

    async def execute(self, tool_name: str, tool_input: dict[str, Any] | None = None) -> ToolResult:
        """Execute a context tool and return its text result."""
        tool_input = tool_input or {}
        log.info("tool_call", tool=tool_name, input=tool_input)

        try:
            match tool_name:
                case "context_load":
                    return text_result(await self.manager.load_context(tool_input.get("focus")))
                case "context_update":
                    update = ContextUpdate.model_validate(tool_input)
                    text = await self.manager.update_context(update)
                    return text_result(text, is_error=text.startswith(templates.UPDATE_FAILED_PREFIX))
                case _:
                    return text_result(f"Unknown tool: {tool_name}", is_error=True)
        except ValidationError as e:
            log.warning("tool_invalid_input", tool=tool_name, errors=e.error_count())
            return text_result(f"Invalid input for tool '{tool_name}': {e}", is_error=True)
        except Exception as e:
            log.error("tool_error", tool=tool_name, error=str(e))
            return text_result(f"Error executing tool '{tool_name}': {e}", is_error=True)
