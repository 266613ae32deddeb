"""Claude tool definitions for project context access."""

from config.constants import TOOL_CONTEXT_LOAD, TOOL_CONTEXT_UPDATE

# Tool definitions following the Anthropic tool-use format
CONTEXT_TOOLS = [
    {
        "name": TOOL_CONTEXT_LOAD,
        "description": (
            "Load the full project context: project DNA, current state, and the most relevant "
            "pattern notes. Use at the start of a working session, or whenever you need to recall "
            "what the project is and where it stands. Pass a focus keyword to only include "
            "patterns that mention it."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "focus": {
                    "type": "string",
                    "description": "Optional focus area used to filter pattern notes (case-insensitive)",
                }
            },
            "required": [],
        },
    },
    {
        "name": TOOL_CONTEXT_UPDATE,
        "description": (
            "Update the project context after development work. Rewrites the current state and "
            "quick-reference files and appends the session to the log. Creates the context "
            "directory on first use."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "summary": {
                    "type": "string",
                    "description": "A short summary of the work done in this session",
                },
                "completed": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Tasks completed in this session",
                },
                "next": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Upcoming tasks, most immediate first",
                },
                "decisions": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Important decisions taken",
                },
            },
            "required": ["summary"],
        },
    },
]
