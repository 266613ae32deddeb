"""Markdown templates for the context files and the loaded context view."""

from config.constants import MARKDOWN_SUFFIX

DEFAULT_PROJECT_DNA = """# 🧬 PROJECT DNA
## Core Vision
- **What is this project?** [A brief, high-level description of the project's purpose.]
- **Who is it for?** [Describe the target user or audience.]
- **What problem does it solve?** [Explain the core problem this project addresses.]

## Technical Stack
- **Frontend:** [e.g., React, Vue, Svelte]
- **Backend:** [e.g., Node.js with Express, Python with Django]
- **Database:** [e.g., PostgreSQL, MongoDB]
- **Deployment:** [e.g., Vercel, AWS, Docker]

## Guiding Principles
1. **Simplicity:** Prefer simple, clear solutions over complex ones.
2. **Performance:** Optimize for speed and efficiency.
3. **Developer Experience:** Maintain a clean, well-documented codebase.

## Key Conventions
- **Commit Messages:** [e.g., Conventional Commits]
- **Code Style:** [e.g., Prettier, ESLint with a specific config]
- **API Design:** [e.g., RESTful, GraphQL]
"""

CONTEXT_NOT_FOUND = (
    "⚠️ Context not found. Please run 'context_update' with a summary "
    "(e.g., 'Initial project setup') to create the necessary context files."
)

UPDATE_FAILED_PREFIX = "❌ Context update failed:"


def _bullets(items: list[str], marker: str, empty: str) -> str:
    if not items:
        return empty
    return "\n".join(f"- {marker} {item}" for item in items)


def current_state(
    timestamp: str,
    summary: str,
    completed: list[str],
    next_steps: list[str],
    decisions: list[str],
) -> str:
    """Body of CURRENT_STATE.md."""
    return (
        f"# CURRENT STATE\n"
        f"## Last Updated: {timestamp}\n\n"
        f"### Summary of Last Session\n{summary}\n\n"
        f"### Completed Tasks\n{_bullets(completed, '✅', 'N/A')}\n\n"
        f"### Next Steps\n{_bullets(next_steps, '🎯', 'To be planned.')}\n\n"
        f"### Recent Decisions\n{_bullets(decisions, '📝', 'N/A')}\n"
    )


def active_context(timestamp: str, summary: str, next_steps: list[str]) -> str:
    """Body of ACTIVE_CONTEXT.md, a short quick-reference view."""
    focus = next_steps[0] if next_steps else "Define the next immediate task."
    return (
        f"# ACTIVE CONTEXT (For Quick Reference)\n"
        f"## Updated: {timestamp}\n\n"
        f"## Immediate Focus\n{focus}\n\n"
        f"## Summary\n{summary}\n"
    )


def session_log_entry(
    timestamp: str,
    summary: str,
    completed: list[str],
    decisions: list[str],
) -> str:
    """One entry appended to SESSION_LOG.md."""
    return (
        f"\n---\n"
        f"## SESSION LOG: {timestamp}\n"
        f"**Summary:** {summary}\n"
        f"**Completed:** {', '.join(completed) or 'N/A'}\n"
        f"**Decisions:** {', '.join(decisions) or 'N/A'}\n"
    )


def pattern_block(filename: str, content: str) -> str:
    """Render a pattern file under a heading derived from its name."""
    title = filename.removesuffix(MARKDOWN_SUFFIX).replace("_", " ")
    return f"### {title}\n{content}"


def context_view(
    dna: str,
    state: str,
    patterns: list[str],
    loaded_at: str,
    focus: str | None = None,
) -> str:
    """The loaded context as one markdown document."""
    header = f"# 🧠 PROJECT CONTEXT {f'- FOCUS: {focus.upper()}' if focus else ''}"
    patterns_section = "## 🧩 ACTIVE PATTERNS\n" + "\n\n".join(patterns) if patterns else ""
    return (
        f"{header}\n\n"
        f"## 🧬 PROJECT DNA\n{dna}\n\n"
        f"## 📊 CURRENT STATE\n{state}\n\n"
        f"{patterns_section}\n\n"
        f"---\n"
        f"*Context loaded at: {loaded_at}*\n"
        f"*Context Keeper: Ready for development.*"
    )


def update_succeeded(summary: str, timestamp: str) -> str:
    return (
        f"✅ **Context updated successfully!**\n\n"
        f"**Summary:** {summary}\n"
        f"**Time:** {timestamp}\n\n"
        f"*Ready for the next session.*"
    )


def update_failed(message: str) -> str:
    return f"{UPDATE_FAILED_PREFIX} {message}"
