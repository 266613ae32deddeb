"""Constants used across the application."""

# Files inside the context directory
DNA_FILE = "PROJECT_DNA.md"
STATE_FILE = "CURRENT_STATE.md"
ACTIVE_CONTEXT_FILE = "ACTIVE_CONTEXT.md"
SESSION_LOG_FILE = "SESSION_LOG.md"
PATTERNS_DIR = "patterns"
MARKDOWN_SUFFIX = ".md"

# Tool names exposed to the agent
TOOL_CONTEXT_LOAD = "context_load"
TOOL_CONTEXT_UPDATE = "context_update"

# Agent loop limits
MAX_TOOL_ROUNDS = 10
MAX_TOOL_RESULT_CHARS = 12_000  # ~3K tokens
