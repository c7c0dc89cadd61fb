"""
Skill registry for the crawler.

Joins the skill definitions of the content repository with the effects of
the skill library.
"""

from catchery import log_warning

from crawler.core.content import ContentRepository

from .base import Skill
from .library import SKILL_EFFECTS


class SkillRegistry:
    """Looks up playable skills by identifier."""

    def __init__(self, repository: ContentRepository | None = None) -> None:
        self.repository = repository or ContentRepository()
        self._skills: dict[str, Skill] = {}
        for skill_id, definition in self.repository.skills.items():
            effect = SKILL_EFFECTS.get(skill_id)
            if effect is None:
                log_warning(
                    f"Skill '{skill_id}' has no effect and cannot be used.",
                    {"skill_id": skill_id},
                )
                continue
            self._skills[skill_id] = Skill(definition, effect)

    def get(self, skill_id: str) -> Skill | None:
        """Returns the skill with the given id, or None if it does not exist."""
        skill = self._skills.get(skill_id)
        if skill is None:
            log_warning(f"Unknown skill '{skill_id}'.", {"skill_id": skill_id})
        return skill

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    @property
    def ids(self) -> list[str]:
        return list(self._skills)

    def all(self) -> list[Skill]:
        return list(self._skills.values())
