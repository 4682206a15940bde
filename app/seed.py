"""
Sample Data

Five tags, five tools and five published Dutch cases for local development
and demo environments. seed_store() is idempotent: it does nothing once any
tag exists.
"""

import logging
from typing import Any, Dict

from app.store import Store
from app.store.models import Case, CaseStatus, Locale, Tag, Tool, new_id, utcnow

logger = logging.getLogger(__name__)

SEED_TAGS = [
    {"slug": "ai-native", "name": "AI-Native"},
    {"slug": "rapid-prototype", "name": "Rapid Prototype"},
    {"slug": "saas", "name": "SaaS"},
    {"slug": "developer-tools", "name": "Developer Tools"},
    {"slug": "automation", "name": "Automation"},
]

SEED_TOOLS = [
    {"slug": "claude", "name": "Claude", "website_url": "https://claude.ai"},
    {"slug": "cursor", "name": "Cursor", "website_url": "https://cursor.sh"},
    {"slug": "v0", "name": "v0", "website_url": "https://v0.dev"},
    {"slug": "bolt", "name": "Bolt", "website_url": "https://bolt.new"},
    {"slug": "copilot", "name": "GitHub Copilot", "website_url": "https://github.com/features/copilot"},
]

SEED_CASES = [
    {
        "slug": "factuurflow",
        "title": "FactuurFlow",
        "one_liner": "Van idee naar werkende facturatie-app in één weekend met AI-pair programming",
        "stack": ["Next.js", "Prisma", "Stripe", "Tailwind"],
        "tag_slugs": ["saas", "rapid-prototype"],
        "tool_slugs": ["claude", "cursor"],
        "problem": "Freelancers en kleine bedrijven worstelen met het bijhouden van facturen. Bestaande oplossingen zijn te complex of te duur voor hun behoeften.",
        "solution": "Een minimalistische facturatie-app gebouwd met AI-pair programming. In één weekend van concept naar MVP met automatische BTW-berekening en PDF-export.",
        "learnings": "AI-assistentie maakte het mogelijk om complexe Stripe-integratie in uren te realiseren in plaats van dagen. De sleutel was het opdelen in kleine, testbare stappen.",
    },
    {
        "slug": "code-review-bot",
        "title": "Code Review Bot",
        "one_liner": "Slack-bot die automatisch PR reviews samenvat en prioriteert",
        "stack": ["Node.js", "Slack API", "OpenAI", "PostgreSQL"],
        "tag_slugs": ["developer-tools", "automation"],
        "tool_slugs": ["copilot", "claude"],
        "problem": "Development teams missen belangrijke PR reviews door de hoeveelheid notificaties. Code blijft te lang liggen en de context gaat verloren.",
        "solution": "Een Slack-bot die PR's analyseert, samenvat en prioriteert op basis van impact en urgentie. Dagelijkse digests houden het team gefocust.",
        "learnings": "Het combineren van GitHub Copilot voor boilerplate en Claude voor complexe logica versnelde de ontwikkeling enorm.",
    },
    {
        "slug": "portfolio-generator",
        "title": "Portfolio Generator",
        "one_liner": "AI-gestuurd portfolio dat zich aanpast aan de bezoeker",
        "stack": ["React", "Vercel", "Tailwind", "Framer Motion"],
        "tag_slugs": ["ai-native", "rapid-prototype"],
        "tool_slugs": ["v0", "cursor"],
        "problem": "Developers hebben moeite om hun werk effectief te presenteren aan verschillende doelgroepen - recruiters willen andere dingen zien dan technische leads.",
        "solution": "Een portfolio dat de bezoeker vraagt naar hun rol en interesse, en vervolgens de presentatie daarop aanpast met relevante projecten en details.",
        "learnings": "v0 was perfect voor het snel itereren op de UI. Cursor hielp bij het implementeren van de personalisatielogica.",
    },
    {
        "slug": "meetingmind",
        "title": "MeetingMind",
        "one_liner": "Transcribeert vergaderingen en genereert actiepunten automatisch",
        "stack": ["Python", "Whisper", "FastAPI", "React"],
        "tag_slugs": ["ai-native", "automation", "saas"],
        "tool_slugs": ["claude", "bolt"],
        "problem": "Vergaderingen leiden zelden tot concrete acties. Notulen worden niet gemaakt of niet gelezen, en afspraken verdwijnen.",
        "solution": "Real-time transcriptie met automatische extractie van actiepunten, deadlines en verantwoordelijken. Directe integratie met projectmanagement tools.",
        "learnings": "Bolt was ideaal voor de snelle frontend setup. Het combineren van Whisper voor transcriptie en Claude voor analyse gaf verrassend goede resultaten.",
    },
    {
        "slug": "component-library",
        "title": "VibeCraft UI",
        "one_liner": "Open-source component library gebouwd in 3 dagen met AI-assistentie",
        "stack": ["React", "TypeScript", "Storybook", "Radix"],
        "tag_slugs": ["developer-tools", "rapid-prototype"],
        "tool_slugs": ["v0", "copilot", "cursor"],
        "problem": "Teams bouwen steeds dezelfde UI-componenten. Bestaande libraries zijn te groot of matchen niet met de gewenste design tokens.",
        "solution": "Een lichtgewicht, volledig toegankelijke component library met focus op composability. Gebouwd bovenop Radix primitives met custom styling.",
        "learnings": "AI-tools maakten het mogelijk om in 3 dagen een productie-waardige library te bouwen die normaal weken zou kosten.",
    },
]


def seed_store(store: Store) -> Dict[str, Any]:
    with store.session() as s:
        if s.tags.list_all():
            logger.info("Store already seeded, skipping")
            return {"message": "Store already seeded", "skipped": True}

        now = utcnow()
        tag_ids = {
            t["slug"]: s.tags.insert(Tag(id=new_id(), created_at=now, **t))
            for t in SEED_TAGS
        }
        tool_ids = {
            t["slug"]: s.tools.insert(Tool(id=new_id(), created_at=now, **t))
            for t in SEED_TOOLS
        }

        for data in SEED_CASES:
            fields = {k: v for k, v in data.items() if k not in ("tag_slugs", "tool_slugs")}
            s.cases.insert(Case(
                id=new_id(),
                locale=Locale.NL,
                status=CaseStatus.PUBLISHED,
                tag_ids=[tag_ids[slug] for slug in data["tag_slugs"] if slug in tag_ids],
                tool_ids=[tool_ids[slug] for slug in data["tool_slugs"] if slug in tool_ids],
                created_at=now,
                **fields,
            ))

    logger.info(f"Seeded {len(SEED_TAGS)} tags, {len(SEED_TOOLS)} tools, {len(SEED_CASES)} cases")
    return {
        "message": "Seed completed",
        "tags": len(SEED_TAGS),
        "tools": len(SEED_TOOLS),
        "cases": len(SEED_CASES),
    }
