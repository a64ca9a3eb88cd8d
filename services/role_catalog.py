"""Static catalog of interview roles and experience levels."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from agents.types import ExperienceLevel, JobRole
from services.errors import InvalidInputError

_ROLE_DATA: List[dict] = [
    {
        "id": "software-engineer",
        "name": "Software Engineer",
        "technical_skills": [
            "Data Structures",
            "Algorithms",
            "System Design",
            "Programming Languages",
            "Testing",
            "Version Control",
            "Debugging",
            "Code Review",
        ],
        "behavioral_competencies": [
            "Problem Solving",
            "Collaboration",
            "Communication",
            "Adaptability",
            "Time Management",
            "Learning Agility",
        ],
        "question_categories": [
            {"name": "Coding", "weight": 0.4, "technical_focus": True},
            {"name": "System Design", "weight": 0.3, "technical_focus": True},
            {"name": "Behavioral", "weight": 0.2, "technical_focus": False},
            {"name": "Problem Solving", "weight": 0.1, "technical_focus": True},
        ],
    },
    {
        "id": "product-manager",
        "name": "Product Manager",
        "technical_skills": [
            "Product Strategy",
            "Market Analysis",
            "User Research",
            "Data Analysis",
            "Roadmap Planning",
            "Metrics & KPIs",
            "A/B Testing",
            "Technical Literacy",
        ],
        "behavioral_competencies": [
            "Leadership",
            "Stakeholder Management",
            "Communication",
            "Decision Making",
            "Prioritization",
            "Influence",
            "Customer Empathy",
        ],
        "question_categories": [
            {"name": "Product Strategy", "weight": 0.3, "technical_focus": True},
            {"name": "Execution", "weight": 0.25, "technical_focus": False},
            {"name": "Leadership", "weight": 0.25, "technical_focus": False},
            {"name": "Analytics", "weight": 0.2, "technical_focus": True},
        ],
    },
    {
        "id": "data-scientist",
        "name": "Data Scientist",
        "technical_skills": [
            "Machine Learning",
            "Statistics",
            "Python/R",
            "SQL",
            "Data Visualization",
            "Feature Engineering",
            "Model Evaluation",
            "Big Data Technologies",
            "Deep Learning",
        ],
        "behavioral_competencies": [
            "Analytical Thinking",
            "Communication",
            "Business Acumen",
            "Collaboration",
            "Curiosity",
            "Problem Solving",
        ],
        "question_categories": [
            {"name": "Machine Learning", "weight": 0.35, "technical_focus": True},
            {"name": "Statistics", "weight": 0.25, "technical_focus": True},
            {"name": "Coding", "weight": 0.2, "technical_focus": True},
            {"name": "Behavioral", "weight": 0.2, "technical_focus": False},
        ],
    },
    {
        "id": "frontend-engineer",
        "name": "Frontend Engineer",
        "technical_skills": [
            "HTML/CSS",
            "JavaScript/TypeScript",
            "React/Vue/Angular",
            "Responsive Design",
            "Web Performance",
            "Accessibility",
            "State Management",
            "Testing",
            "Build Tools",
        ],
        "behavioral_competencies": [
            "Attention to Detail",
            "User Empathy",
            "Collaboration",
            "Communication",
            "Problem Solving",
            "Adaptability",
        ],
        "question_categories": [
            {"name": "UI Development", "weight": 0.35, "technical_focus": True},
            {"name": "JavaScript", "weight": 0.3, "technical_focus": True},
            {"name": "Design & UX", "weight": 0.2, "technical_focus": True},
            {"name": "Behavioral", "weight": 0.15, "technical_focus": False},
        ],
    },
    {
        "id": "backend-engineer",
        "name": "Backend Engineer",
        "technical_skills": [
            "API Design",
            "Database Design",
            "System Architecture",
            "Security",
            "Performance Optimization",
            "Microservices",
            "Cloud Services",
            "Testing",
            "DevOps",
        ],
        "behavioral_competencies": [
            "Problem Solving",
            "Collaboration",
            "Communication",
            "Reliability",
            "Scalability Mindset",
            "Learning Agility",
        ],
        "question_categories": [
            {"name": "System Design", "weight": 0.35, "technical_focus": True},
            {"name": "API Development", "weight": 0.3, "technical_focus": True},
            {"name": "Databases", "weight": 0.2, "technical_focus": True},
            {"name": "Behavioral", "weight": 0.15, "technical_focus": False},
        ],
    },
    {
        "id": "devops-engineer",
        "name": "DevOps Engineer",
        "technical_skills": [
            "CI/CD",
            "Infrastructure as Code",
            "Cloud Platforms",
            "Containerization",
            "Monitoring & Logging",
            "Scripting",
            "Security",
            "Networking",
            "Automation",
        ],
        "behavioral_competencies": [
            "Problem Solving",
            "Collaboration",
            "Communication",
            "Reliability",
            "Process Improvement",
            "Incident Management",
        ],
        "question_categories": [
            {"name": "Infrastructure", "weight": 0.35, "technical_focus": True},
            {"name": "CI/CD", "weight": 0.3, "technical_focus": True},
            {"name": "Monitoring", "weight": 0.2, "technical_focus": True},
            {"name": "Behavioral", "weight": 0.15, "technical_focus": False},
        ],
    },
]

_LEVEL_DATA: List[dict] = [
    {"level": "entry", "years_min": 0, "years_max": 2, "expected_depth": 3},
    {"level": "mid", "years_min": 2, "years_max": 5, "expected_depth": 6},
    {"level": "senior", "years_min": 5, "years_max": 10, "expected_depth": 8},
    {"level": "lead", "years_min": 10, "years_max": 100, "expected_depth": 10},
]


def _key(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


class RoleCatalog:
    """Read-only lookups over the role and level tables."""

    def __init__(
        self,
        roles: Optional[Iterable[JobRole]] = None,
        levels: Optional[Iterable[ExperienceLevel]] = None,
    ):
        role_list = list(roles) if roles is not None else [JobRole.model_validate(r) for r in _ROLE_DATA]
        level_list = (
            list(levels) if levels is not None else [ExperienceLevel.model_validate(l) for l in _LEVEL_DATA]
        )
        self._roles: Dict[str, JobRole] = {role.id: role for role in role_list}
        self._roles_by_name: Dict[str, JobRole] = {_key(role.name): role for role in role_list}
        self._levels: Dict[str, ExperienceLevel] = {level.level: level for level in level_list}

    def roles(self) -> List[JobRole]:
        return list(self._roles.values())

    def levels(self) -> List[ExperienceLevel]:
        return list(self._levels.values())

    def role_ids(self) -> List[str]:
        return list(self._roles)

    def role_names(self) -> List[str]:
        return [role.name for role in self._roles.values()]

    def level_names(self) -> List[str]:
        return list(self._levels)

    def role_by_id(self, role_id: str) -> JobRole:
        role = self._roles.get(_key(role_id))
        if role is None:
            raise InvalidInputError(
                f'Invalid role ID: "{role_id}". Please select from available options.',
                self.role_ids(),
            )
        return role

    def role_by_name(self, name: str) -> JobRole:
        role = self._roles_by_name.get(_key(name))
        if role is None:
            raise InvalidInputError(
                f'Invalid role name: "{name}". Please select from available options.',
                self.role_names(),
            )
        return role

    def resolve_role(self, id_or_name: str) -> JobRole:
        """Look up a role by id first, then by display name."""

        if self.is_valid_role_id(id_or_name):
            return self.role_by_id(id_or_name)
        if self.is_valid_role_name(id_or_name):
            return self.role_by_name(id_or_name)
        raise InvalidInputError(
            f'Invalid role: "{id_or_name}". Please select from available options.',
            self.role_ids(),
        )

    def level(self, name: str) -> ExperienceLevel:
        level = self._levels.get(_key(name))
        if level is None:
            raise InvalidInputError(
                f'Invalid experience level: "{name}". Please select from available options.',
                self.level_names(),
            )
        return level

    def is_valid_role_id(self, role_id: Optional[str]) -> bool:
        return _key(role_id) in self._roles

    def is_valid_role_name(self, name: Optional[str]) -> bool:
        return _key(name) in self._roles_by_name

    def is_valid_level(self, name: Optional[str]) -> bool:
        return _key(name) in self._levels


catalog = RoleCatalog()


__all__ = ["RoleCatalog", "catalog"]
