"""Prompt template for meeting summarization.

The template is part of the public contract: section names and formatting
rules are observable in every summary.  Bump :data:`PROMPT_VERSION` whenever
the wording changes.
"""

from __future__ import annotations

PROMPT_VERSION = "1"

TRANSCRIPT_MARKER = "Transcript:\n"

MEETING_SUMMARY_PROMPT = (
    "\n"
    "Summarize the following meeting transcript as a single, structured summary in Markdown format. \n"
    "\n"
    "**Rules:**\n"
    "\n"
    "- Use clear Markdown headings (e.g., ## Summary, ## Action Items, ## Attendance, ## Topics Covered).\n"
    "- Highlight key points (main headings) with double asterisks (**bold**), or use Markdown headers.\n"
    "- For lists (like action items or attendees), use bullet points (-) or numbered lists.\n"
    "- Group all sections into one markdown-formatted response.\n"
    "- Do NOT output code blocks or JSON. Do NOT use triple backticks.\n"
    "- Do NOT include any AI explanation or disclaimer.\n"
    "- If any field is missing, omit that section.\n"
    "\n"
    "**Sections to include if present:**\n"
    "- Summary: concise summary of key points and decisions\n"
    "- Action Items: list with assignee and deadline if available "
    "(e.g., \"- Draft creative concepts — Alice (by April 20)\")\n"
    "- Attendance: list of attendees\n"
    "- Topics Covered: main topics discussed\n"
    "\n"
    "Transcript:\n"
    "{transcript}\n"
)


def build_prompt(text: str) -> str:
    """Interpolate ``text`` verbatim after the ``Transcript:`` marker."""
    return MEETING_SUMMARY_PROMPT.format(transcript=text)
