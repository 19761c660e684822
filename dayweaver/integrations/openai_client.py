"""OpenAI API integration for Day Weaver.

This module provides the daily schedule suggestion: given the user's
actionable tasks it asks the model for a time-boxed plan plus notes.
"""

import os
import json
import logging
from typing import List, Optional
from openai import OpenAI, APIError
from pydantic import ValidationError
from dotenv import load_dotenv

from dayweaver.exceptions import GenerationFailed
from dayweaver.models.schedule import ScheduleRequestItem, ScheduleSuggestion

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# OpenAI model to use for schedule suggestions
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

SCHEDULE_PROMPT_TEMPLATE = """You are a personal AI assistant that specializes in generating optimized daily schedules.

Given a list of tasks, deadlines, and priorities, generate a schedule that maximizes productivity and ensures all deadlines are met.

Consider the priority of each task when creating the schedule. High-priority tasks should be scheduled first, followed by medium-priority tasks, and then low-priority tasks.

Attempt to infer the duration of tasks if not provided, and include it in your notes.

Here are the tasks, deadlines, and priorities:

{task_lines}

Respond with a JSON object containing:
- "schedule": an ordered list of objects with "task", "deadline", "priority", "duration_estimate" (optional), "start_time" (HH:mm) and "end_time" (HH:mm)
- "notes": optional notes or suggestions for the user

Respond only with the JSON object, no other text."""


def format_task_lines(items: List[ScheduleRequestItem]) -> str:
    """Render request items as the bullet list used in the prompt."""
    lines = []
    for item in items:
        line = f"- Task: {item.task}, Deadline: {item.deadline}, Priority: {item.priority}"
        if item.duration_estimate:
            line += f", Duration Estimate: {item.duration_estimate}"
        lines.append(line)
    return "\n".join(lines)


def strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    content = content.strip()
    if content.startswith("```json"):
        content = content[7:]
    if content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


class OpenAIClient:
    """Client for OpenAI API integration."""

    def __init__(self, api_key: Optional[str] = None, client: Optional[OpenAI] = None):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY environment variable.
            client: Preconfigured OpenAI client (takes precedence over api_key)

        Note:
            Without a key the client still initializes, and every suggestion
            request fails with GenerationFailed.
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.client = client

        if self.client is None and self.api_key:
            self.client = OpenAI(api_key=self.api_key)
        elif self.client is None:
            logger.warning("OPENAI_API_KEY not found in environment. Schedule suggestions will not be available.")

    def generate_daily_schedule(self, items: List[ScheduleRequestItem]) -> ScheduleSuggestion:
        """Ask the model for an optimized daily schedule.

        Args:
            items: Tasks to schedule, already ranked

        Returns:
            ScheduleSuggestion with the proposed schedule and notes

        Raises:
            GenerationFailed: If the client is unavailable, the call fails,
                or the response has no usable schedule or notes
        """
        if not self.client:
            raise GenerationFailed("Schedule suggestions are not configured.")
        if not items:
            raise GenerationFailed("No tasks to schedule.")

        try:
            prompt = SCHEDULE_PROMPT_TEMPLATE.format(task_lines=format_task_lines(items))
            response = self.client.chat.completions.create(
                model=OPENAI_MODEL,
                messages=[
                    {"role": "system", "content": "You are a daily planning assistant. Respond only with valid JSON."},
                    {"role": "user", "content": prompt}
                ],
                temperature=0.3,
            )
            response_content = response.choices[0].message.content or ""
        except APIError as e:
            # Handle OpenAI API errors (rate limits, quota issues, invalid key, etc.)
            error_code = getattr(e, 'code', None)
            status_code = getattr(e, 'status_code', None)

            if error_code == 'insufficient_quota':
                logger.warning("OpenAI API quota insufficient for schedule generation.")
            elif status_code == 429:
                logger.warning("OpenAI API rate limit exceeded for schedule generation.")
            else:
                logger.error(f"OpenAI API error during schedule generation: {status_code or 'unknown'} ({error_code or 'unknown'})")
            # Don't log full error message as it might contain sensitive info
            raise GenerationFailed("Schedule generation failed.") from e
        except Exception as e:
            logger.error(f"Error calling OpenAI API: {type(e).__name__}")
            raise GenerationFailed("Schedule generation failed.") from e

        suggestion = self._parse_suggestion(response_content)
        logger.debug(f"OpenAI suggested {len(suggestion.schedule)} scheduled tasks")
        return suggestion

    def _parse_suggestion(self, response_content: str) -> ScheduleSuggestion:
        content = strip_code_fence(response_content)
        try:
            suggestion = ScheduleSuggestion.model_validate(json.loads(content))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse OpenAI JSON response: {e}. Response: {content[:100]}")
            raise GenerationFailed("Schedule generation returned malformed output.") from e
        except ValidationError as e:
            logger.warning(f"OpenAI schedule did not match the expected shape: {e.error_count()} errors")
            raise GenerationFailed("Schedule generation returned malformed output.") from e

        if not suggestion.schedule and not (suggestion.notes or "").strip():
            logger.warning("OpenAI returned an empty schedule")
            raise GenerationFailed("Schedule generation returned no schedule.")
        return suggestion
