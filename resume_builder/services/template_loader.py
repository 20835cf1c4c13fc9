# resume_builder/services/template_loader.py
import json
import logging
import os
import re
from typing import List, Optional

from resume_builder.config import settings
from resume_builder.constants import DEFAULT_SECTION_ORDER

logger = logging.getLogger(__name__)

TEMPLATE_ID_REGEX = re.compile(r"^[A-Za-z0-9_-]+$")

# Summary always leads, whatever the template says
LEADING_SECTIONS = ["Professional Summary"]

# Short names used by generated templates
SECTION_ALIASES = {
    "summary": "Professional Summary",
    "work": "Work Experience",
    "experience": "Work Experience",
    "volunteer": "Volunteer Experience",
    "hobbies": "Hobbies & Interests",
}


def load_template(template_id: Optional[str]) -> Optional[dict]:
    """Template metadata for an id, or None (default layout) when unusable."""
    if not template_id:
        return None
    if not TEMPLATE_ID_REGEX.match(template_id):
        logger.warning("Ignoring malformed template id %r", template_id)
        return None

    path = os.path.join(settings.templates_dir, f"{template_id}.json")
    if not os.path.exists(path):
        logger.warning("Template not found: %s, using default template", template_id)
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            template = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error loading template %s: %s", template_id, e)
        return None

    if not isinstance(template, dict):
        logger.error("Template %s is not a JSON object", template_id)
        return None
    logger.info("Loaded template: %s", template_id)
    return template


def _canonical_section(name) -> Optional[str]:
    if not isinstance(name, str):
        return None
    name = name.strip()
    if name in DEFAULT_SECTION_ORDER:
        return name
    return SECTION_ALIASES.get(name.lower())


def merge_section_order(template_order) -> List[str]:
    """
    Leading sections, then the template's order, then every remaining default
    section, so a template can reorder sections but never drop one.
    """
    order = list(LEADING_SECTIONS)
    for name in template_order or []:
        section = _canonical_section(name)
        if section and section not in order:
            order.append(section)
    order.extend(s for s in DEFAULT_SECTION_ORDER if s not in order)
    return order


def section_order_for_template(template_id: Optional[str]) -> Optional[List[str]]:
    template = load_template(template_id)
    if template is None:
        return None
    template_order = template.get("section_order")
    if not isinstance(template_order, list) or not template_order:
        return None
    return merge_section_order(template_order)
