from __future__ import annotations

import logging
import os

import anthropic

logger = logging.getLogger(__name__)

EMAIL_TYPES = ("follow-up", "outreach", "reminder")

EMAIL_PROMPT = """\
Write a short, professional {kind} email for a sales team using a CRM.

Context from the user:
{prompt}

Rules:
- Start with a "Subject:" line, then a blank line, then the body
- Keep the body under 150 words
- Sign off as "The Nexora Team"
- Return ONLY the email text, no commentary
"""

_KIND_LABELS = {
    "follow-up": "follow-up",
    "outreach": "cold outreach",
    "reminder": "friendly reminder",
}

_TEMPLATES = {
    "follow-up": (
        "Subject: Following up\n\n"
        "Hi there,\n\n"
        "I wanted to follow up on our recent conversation: {prompt}\n\n"
        "Let me know if you have any questions or if there's a good time to talk.\n\n"
        "Best regards,\nThe Nexora Team"
    ),
    "outreach": (
        "Subject: Quick introduction\n\n"
        "Hi there,\n\n"
        "I'm reaching out because {prompt}\n\n"
        "Would you be open to a short call this week?\n\n"
        "Best regards,\nThe Nexora Team"
    ),
    "reminder": (
        "Subject: Friendly reminder\n\n"
        "Hi there,\n\n"
        "Just a quick reminder: {prompt}\n\n"
        "Thanks, and talk soon.\n\n"
        "Best regards,\nThe Nexora Team"
    ),
}


def _template_email(prompt: str, email_type: str) -> str:
    return _TEMPLATES[email_type].format(prompt=prompt.strip().rstrip("."))


async def draft_email(prompt: str, email_type: str = "follow-up", api_key: str | None = None) -> str:
    """Draft an email. Uses Claude when an API key is available, else a template.

    ``api_key`` defaults to the ANTHROPIC_API_KEY environment variable.
    """
    if email_type not in EMAIL_TYPES:
        raise ValueError(f"Unsupported email type {email_type!r}")
    if not prompt.strip():
        raise ValueError("Prompt must not be empty")

    if api_key is None:
        api_key = os.environ.get("ANTHROPIC_API_KEY", "")
    if api_key:
        try:
            client = anthropic.Anthropic(api_key=api_key)
            message = client.messages.create(
                model="claude-sonnet-4-20250514",
                max_tokens=1024,
                messages=[
                    {
                        "role": "user",
                        "content": EMAIL_PROMPT.format(kind=_KIND_LABELS[email_type], prompt=prompt),
                    }
                ],
            )
            return message.content[0].text.strip()
        except Exception:
            logger.exception("AI email generation failed, falling back to template")

    logger.info("Using template email draft")
    return _template_email(prompt, email_type)
