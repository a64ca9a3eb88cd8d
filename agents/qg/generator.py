"""Initial question-set generation."""
from __future__ import annotations

import math
import random
from collections import OrderedDict
from typing import Dict, List, Optional, Set

from agents.types import ExperienceLevel, InterviewQuestion, JobRole, ResumeAnalysis, ResponseEvaluation
from config.settings import settings

from .behavioral import behavioral_templates
from .common import QuestionTemplate, make_question
from .followup import generate_follow_up
from .resume import matched_categories, resume_behavioral_template, resume_technical_templates
from .technical import technical_templates

RESUME_CATEGORY_BOOST = 2.0


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").strip().lower() == (b or "").strip().lower()


class QuestionGenerator:
    """Builds ordered question sets and on-demand follow-ups."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------
    def question_count(self, level: ExperienceLevel) -> int:
        span = settings.MAX_QUESTIONS - settings.MIN_QUESTIONS
        count = settings.MIN_QUESTIONS + math.floor(level.expected_depth / 10 * span)
        return max(settings.MIN_QUESTIONS, min(settings.MAX_QUESTIONS, count))

    def technical_ratio(self, role: JobRole) -> float:
        total = sum(category.weight for category in role.question_categories) or 1.0
        technical = sum(category.weight for category in role.question_categories if category.technical_focus)
        jitter = self.rng.uniform(-settings.TECHNICAL_RATIO_JITTER, settings.TECHNICAL_RATIO_JITTER)
        return max(settings.TECHNICAL_RATIO_MIN, min(settings.TECHNICAL_RATIO_MAX, technical / total + jitter))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def _category_weights(
        self, role: JobRole, boosted: Set[str], drill_category: Optional[str]
    ) -> Dict[str, float]:
        weights: Dict[str, float] = {}
        for category in role.question_categories:
            weight = category.weight
            if category.name in boosted:
                weight *= RESUME_CATEGORY_BOOST
            weights[category.name] = weight
        if drill_category:
            weights = {name: (100.0 if _same(name, drill_category) else w) for name, w in weights.items()}
        return weights

    def _sample(
        self,
        templates: List[QuestionTemplate],
        count: int,
        weights: Dict[str, float],
        drill_category: Optional[str] = None,
    ) -> List[QuestionTemplate]:
        """Weighted draw by category, without replacement."""

        pools: "OrderedDict[str, List[QuestionTemplate]]" = OrderedDict()
        for template in templates:
            pools.setdefault(template.category, []).append(template)
        for pool in pools.values():
            self.rng.shuffle(pool)

        chosen: List[QuestionTemplate] = []
        if drill_category:
            for name, pool in pools.items():
                if _same(name, drill_category) and pool and len(chosen) < count:
                    chosen.append(pool.pop())
        while len(chosen) < count:
            names = [name for name, pool in pools.items() if pool]
            if not names:
                break
            # Categories absent from the role table (competencies) share a neutral weight.
            draw = self.rng.choices(names, weights=[weights.get(name, 0.1) for name in names], k=1)[0]
            chosen.append(pools[draw].pop())
        return chosen

    def _order(self, questions: List[InterviewQuestion], drill_category: Optional[str]) -> List[InterviewQuestion]:
        """Shuffle, then rebuild so no category repeats back to back when avoidable."""

        remaining = list(questions)
        self.rng.shuffle(remaining)
        ordered: List[InterviewQuestion] = []
        if drill_category:
            for question in remaining:
                if _same(question.category, drill_category):
                    ordered.append(question)
                    remaining.remove(question)
                    break
        while remaining:
            last = ordered[-1].category if ordered else None
            counts: Dict[str, int] = {}
            for question in remaining:
                counts[question.category] = counts.get(question.category, 0) + 1
            candidates = [name for name in counts if name != last] or list(counts)
            best = max(candidates, key=lambda name: counts[name])
            pick = next(question for question in remaining if question.category == best)
            ordered.append(pick)
            remaining.remove(pick)
        return ordered

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def generate_question_set(
        self,
        role: JobRole,
        level: ExperienceLevel,
        resume_analysis: Optional[ResumeAnalysis] = None,
        drill_category: Optional[str] = None,
    ) -> List[InterviewQuestion]:
        count = self.question_count(level)
        technical_count = min(count - 1, max(1, round(count * self.technical_ratio(role))))
        behavioral_count = count - technical_count

        technical: List[InterviewQuestion] = []
        behavioral: List[InterviewQuestion] = []
        if resume_analysis is not None:
            limit = min(settings.RESUME_QUESTIONS_MAX, max(1, technical_count // 2))
            for template, reference in resume_technical_templates(role, resume_analysis, limit):
                technical.append(make_question(template, level, resume_context=reference))
            anchored = resume_behavioral_template(resume_analysis)
            if anchored is not None and behavioral_count > 1:
                template, reference = anchored
                behavioral.append(make_question(template, level, resume_context=reference))

        weights = self._category_weights(role, matched_categories(role, resume_analysis), drill_category)
        for template in self._sample(
            technical_templates(role), technical_count - len(technical), weights, drill_category
        ):
            technical.append(make_question(template, level))

        taken = {question.category for question in behavioral}
        pool = [template for template in behavioral_templates(role) if template.category not in taken]
        for template in self._sample(pool, behavioral_count - len(behavioral), weights, drill_category):
            behavioral.append(make_question(template, level))

        return self._order(technical + behavioral, drill_category)

    def generate_follow_up(
        self,
        parent: InterviewQuestion,
        evaluation: ResponseEvaluation,
        response_text: str = "",
    ) -> Optional[InterviewQuestion]:
        return generate_follow_up(parent, evaluation, response_text)


__all__ = ["QuestionGenerator", "RESUME_CATEGORY_BOOST"]
