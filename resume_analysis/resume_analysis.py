from __future__ import annotations  # Resume analysis collaborator for question personalization

import re
from typing import Dict, List, Tuple

from agents.types import AlignmentScore, JobRole, ResumeAnalysis, ResumeDocument, ResumeSkill
from services.errors import ResumeAnalysisError

CULTURAL_BASELINE = 70.0
EXPERIENCE_POINTS_PER_ENTRY = 25.0
MAX_SECTION_LINES = 12
DEGRADED_SUMMARY = "Resume parsing failed. Proceeding with generic role-based questions."

SKILL_CATALOG: Dict[str, List[str]] = {
    "Programming Languages": [
        "python", "java", "javascript", "typescript", "c++", "c#", "ruby", "golang", "rust",
        "php", "swift", "kotlin", "scala",
    ],
    "Frameworks": [
        "react", "angular", "vue", "django", "flask", "fastapi", "spring", "express", "node.js",
        "next.js", "nest.js",
    ],
    "Databases": ["sql", "mysql", "postgresql", "mongodb", "redis", "dynamodb", "cassandra", "oracle"],
    "Cloud": ["aws", "azure", "gcp", "docker", "kubernetes", "terraform"],
    "DevOps": ["ci/cd", "jenkins", "github actions", "ansible", "prometheus", "grafana"],
    "Tools": ["git", "jira", "webpack", "gradle", "maven"],
    "Data Science": [
        "machine learning", "deep learning", "tensorflow", "pytorch", "scikit-learn", "pandas",
        "numpy", "spark",
    ],
}

DISPLAY_NAMES: Dict[str, str] = {
    "javascript": "JavaScript", "typescript": "TypeScript", "c++": "C++", "c#": "C#", "php": "PHP",
    "node.js": "Node.js", "next.js": "Next.js", "nest.js": "NestJS", "fastapi": "FastAPI",
    "sql": "SQL", "mysql": "MySQL", "postgresql": "PostgreSQL", "mongodb": "MongoDB",
    "dynamodb": "DynamoDB", "aws": "AWS", "gcp": "GCP", "ci/cd": "CI/CD",
    "github actions": "GitHub Actions", "tensorflow": "TensorFlow", "pytorch": "PyTorch",
    "scikit-learn": "scikit-learn", "numpy": "NumPy", "golang": "Go",
}

SECTION_ALIASES: Dict[str, Tuple[str, ...]] = {
    "skills": ("skills", "technical skills", "technologies", "tech stack"),
    "experience": ("experience", "work experience", "professional experience", "employment", "work history"),
    "projects": ("projects", "personal projects", "selected projects"),
    "achievements": ("achievements", "accomplishments", "awards"),
    "education": ("education",),
    "summary": ("summary", "profile", "objective", "about"),
}

_BULLET = re.compile(r"^\s*(?:[-*•▪]|\d+[.)])\s*")
_HEADER = re.compile(r"^\s*#*\s*([A-Za-z][A-Za-z &]+?)\s*:?\s*$")


class ResumeParsingError(ResumeAnalysisError):  # Raised when a document cannot be read
    pass


def _display(keyword: str) -> str:  # Canonical casing for a catalog keyword
    return DISPLAY_NAMES.get(keyword, keyword.title())


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9+#])")


def split_sections(text: str) -> Dict[str, List[str]]:  # Group bullet lines under known headers
    sections: Dict[str, List[str]] = {}
    current = "summary"
    lookup = {alias: name for name, aliases in SECTION_ALIASES.items() for alias in aliases}
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        header = _HEADER.match(line)
        if header and header.group(1).strip().lower() in lookup:
            current = lookup[header.group(1).strip().lower()]
            sections.setdefault(current, [])
            continue
        cleaned = _BULLET.sub("", line).strip()
        if cleaned:
            sections.setdefault(current, []).append(cleaned)
    return sections


def extract_skills(text: str) -> List[ResumeSkill]:  # Catalog keywords found anywhere in the text
    lowered = text.lower()
    found: List[Tuple[int, ResumeSkill]] = []
    seen = set()
    for category, keywords in SKILL_CATALOG.items():
        for keyword in keywords:
            match = _keyword_pattern(keyword).search(lowered)
            name = _display(keyword)
            if match and name not in seen:
                seen.add(name)
                found.append((match.start(), ResumeSkill(name=name, category=category)))
    found.sort(key=lambda pair: pair[0])
    return [skill for _, skill in found]


def _role_skill_evidenced(role_skill: str, skills: List[ResumeSkill], lowered_text: str) -> bool:
    target = role_skill.lower()
    if target in lowered_text:
        return True
    for skill in skills:
        name = skill.name.lower()
        if name in target or target in name or skill.category.lower() == target:
            return True
    return False


def match_role_skills(role: JobRole, skills: List[ResumeSkill], text: str) -> Tuple[List[str], List[str]]:
    lowered = text.lower()
    matched = [skill for skill in role.technical_skills if _role_skill_evidenced(skill, skills, lowered)]
    missing = [skill for skill in role.technical_skills if skill not in matched]
    return matched, missing


def calculate_alignment(role: JobRole, matched: List[str], experience: List[str]) -> AlignmentScore:
    technical = 100.0 * len(matched) / len(role.technical_skills) if role.technical_skills else 0.0
    experience_score = min(100.0, EXPERIENCE_POINTS_PER_ENTRY * len(experience))
    overall = technical * 0.5 + experience_score * 0.3 + CULTURAL_BASELINE * 0.2
    return AlignmentScore(
        overall=float(round(overall)),
        technical=float(round(technical)),
        experience=float(round(experience_score)),
        cultural=CULTURAL_BASELINE,
    )


def _strengths(matched: List[str], skills: List[ResumeSkill], experience: List[str], projects: List[str]) -> List[str]:
    strengths: List[str] = []
    if skills and matched:
        strengths.append("Technical Skills: " + ", ".join(skill.name for skill in skills[:5]))
    if experience:
        strengths.append(f"Relevant Experience: {len(experience)} role entr{'y' if len(experience) == 1 else 'ies'}")
    if projects:
        strengths.append(f"Project Experience: {len(projects)} project(s)")
    return strengths


def _summary(alignment: AlignmentScore, strengths: List[str], gaps: List[str]) -> str:
    parts = [f"Overall alignment score: {alignment.overall:.0f}%."]
    if strengths:
        parts.append("Key strengths identified: " + ", ".join(s.split(":")[0] for s in strengths) + ".")
    else:
        parts.append("Limited alignment with role requirements detected.")
    if gaps:
        parts.append(f"{len(gaps)} skill gap(s) identified for improvement.")
    else:
        parts.append("Strong technical alignment with role requirements.")
    return " ".join(parts)


def analyze_resume(document: ResumeDocument, role: JobRole) -> ResumeAnalysis:  # Parse and score a resume for a role
    if document.format != "text":
        raise ResumeParsingError(f"Unsupported resume format: {document.format}")
    text = document.content or ""
    if not text.strip():
        raise ResumeParsingError("Resume document is empty")

    sections = split_sections(text)
    skills = extract_skills(text)
    experience = sections.get("experience", [])[:MAX_SECTION_LINES]
    projects = sections.get("projects", [])[:MAX_SECTION_LINES]
    achievements = sections.get("achievements", [])[:MAX_SECTION_LINES]
    if not achievements:
        achievements = [line for line in experience + projects if "%" in line][:MAX_SECTION_LINES]

    matched, missing = match_role_skills(role, skills, text)
    gaps = [f"No evidence of {skill}" for skill in missing]
    alignment = calculate_alignment(role, matched, experience)
    strengths = _strengths(matched, skills, experience, projects)
    return ResumeAnalysis(
        technical_skills=skills,
        experience=experience,
        projects=projects,
        achievements=achievements,
        strengths=strengths,
        gaps=gaps,
        matched_skills=matched,
        missing_skills=missing,
        alignment_score=alignment,
        summary=_summary(alignment, strengths, gaps),
    )


def minimal_analysis(role: JobRole) -> ResumeAnalysis:  # Degraded result used when parsing fails
    return ResumeAnalysis(
        missing_skills=list(role.technical_skills),
        alignment_score=AlignmentScore(),
        summary=DEGRADED_SUMMARY,
    )
