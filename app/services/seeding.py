"""Seed levels, their badges and a starter scenario on an empty database."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.repositories import (
    BadgeRepository,
    LevelRepository,
    ScenarioRepository,
    ScenarioStepRepository,
)

logger = logging.getLogger(__name__)

LEVEL_TITLES = [
    "Foundations",
    "Recognizing Threats",
    "Verification Habits",
    "Incident Response",
    "Advanced Pretexting",
    "Security Champion",
]

STARTER_SCENARIO = {
    "title": "Unexpected invoice",
    "description": "An email from an unknown supplier asks you to pay an overdue invoice today.",
    "steps": [
        {
            "prompt": "The email has a link to 'view invoice'. What do you do first?",
            "options": {"A": "Click the link", "B": "Check the sender address", "C": "Forward to a colleague", "D": "Reply asking for details"},
            "correct_action": "B",
            "feedback": "Inspect the sender before interacting with anything in the message.",
        },
        {
            "prompt": "The sender domain is one letter off from a known supplier. Next step?",
            "options": {"A": "Pay to avoid late fees", "B": "Ignore it", "C": "Report it as phishing", "D": "Call the number in the email"},
            "correct_action": "C",
            "feedback": "Lookalike domains are a classic sign of phishing; report it.",
        },
        {
            "prompt": "Finance asks whether the invoice is real. How do you verify?",
            "options": {"A": "Use the supplier's known contact details", "B": "Trust the email signature", "C": "Ask the sender", "D": "Search the invoice number online"},
            "correct_action": "A",
            "feedback": "Verify through a channel you already trust, never one supplied by the message.",
        },
    ],
}


async def seed_content(db: AsyncSession, settings: Settings) -> None:
    """Create levels 1..max_level with a badge each, plus one scenario in the first level."""
    levels = LevelRepository(db)
    if await levels.count() > 0:
        return

    badges = BadgeRepository(db)
    for level_id in range(1, settings.max_level + 1):
        title = LEVEL_TITLES[level_id - 1] if level_id <= len(LEVEL_TITLES) else f"Level {level_id}"
        await levels.create(id=level_id, title=title, description=f"Level {level_id}: {title}")
        await badges.create(
            level_id=level_id,
            name=f"{title} Badge",
            description=f"Completed every scenario in level {level_id}",
            icon_url=None,
        )

    scenario = await ScenarioRepository(db).create(
        level_id=settings.first_level_id,
        title=STARTER_SCENARIO["title"],
        description=STARTER_SCENARIO["description"],
    )
    steps = ScenarioStepRepository(db)
    for order, step in enumerate(STARTER_SCENARIO["steps"], start=1):
        await steps.create(scenario_id=scenario.id, step_order=order, **step)

    logger.info("Seeded %s levels and a starter scenario", settings.max_level)
