"""Technical question templates keyed by role."""
from __future__ import annotations

from typing import Dict, List

from agents.types import JobRole

from .common import QuestionTemplate


def _t(text: str, category: str, offset: int, expected: List[str]) -> QuestionTemplate:
    return QuestionTemplate(
        text=text,
        category=category,
        type="technical",
        difficulty_offset=offset,
        expected_elements=expected,
    )


ROLE_TEMPLATES: Dict[str, List[QuestionTemplate]] = {
    "software-engineer": [
        _t(
            "Explain the difference between a stack and a queue. When would you use each?",
            "Coding",
            -1,
            ["stack", "queue", "lifo", "fifo"],
        ),
        _t(
            "Explain how you would implement a thread-safe singleton.",
            "Coding",
            1,
            ["thread safety", "synchronization", "lazy initialization"],
        ),
        _t(
            "What is the time complexity of common sorting algorithms, and which would you choose for different scenarios?",
            "Coding",
            0,
            ["o(n log n)", "quicksort", "mergesort", "trade-off"],
        ),
        _t(
            "How would you design a URL shortening service like bit.ly?",
            "System Design",
            2,
            ["database", "hash", "scalability", "api"],
        ),
        _t(
            "How would you design a rate limiter for a public API?",
            "System Design",
            1,
            ["token bucket", "distributed", "cache", "limits"],
        ),
        _t(
            "Describe your approach to debugging a production issue that only occurs intermittently.",
            "Problem Solving",
            0,
            ["logging", "monitoring", "reproduc", "root cause"],
        ),
    ],
    "product-manager": [
        _t(
            "How would you prioritize features for the next product release?",
            "Product Strategy",
            0,
            ["user value", "business impact", "effort", "framework"],
        ),
        _t(
            "How do you conduct user research to validate product assumptions?",
            "Product Strategy",
            -1,
            ["interview", "survey", "usability", "data"],
        ),
        _t(
            "Walk me through how you would measure the success of a new feature.",
            "Analytics",
            0,
            ["metric", "kpi", "baseline", "goal"],
        ),
        _t(
            "Explain how you would design an A/B test for a new checkout flow.",
            "Analytics",
            1,
            ["hypothesis", "metric", "sample size", "variant"],
        ),
    ],
    "data-scientist": [
        _t(
            "Explain the bias-variance tradeoff in machine learning.",
            "Machine Learning",
            0,
            ["bias", "variance", "overfitting", "underfitting"],
        ),
        _t(
            "Describe the process of feature engineering for a predictive model.",
            "Machine Learning",
            0,
            ["feature selection", "transformation", "domain knowledge", "validation"],
        ),
        _t(
            "What evaluation metrics would you use for a classification problem with imbalanced classes?",
            "Machine Learning",
            1,
            ["precision", "recall", "f1", "roc"],
        ),
        _t(
            "How would you handle missing data in a dataset?",
            "Statistics",
            -1,
            ["imputation", "deletion", "analysis", "impact"],
        ),
        _t(
            "How would you decide whether an observed difference between two groups is statistically significant?",
            "Statistics",
            0,
            ["hypothesis", "p-value", "sample size", "confidence interval"],
        ),
        _t(
            "Explain how you would optimize a SQL query that is running slowly.",
            "Coding",
            0,
            ["index", "query plan", "join", "optimiz"],
        ),
    ],
    "frontend-engineer": [
        _t(
            "How would you implement responsive design for a complex web application?",
            "UI Development",
            -1,
            ["media queries", "flexbox", "grid", "mobile-first"],
        ),
        _t(
            "Describe your approach to optimizing web performance and load times.",
            "UI Development",
            1,
            ["lazy loading", "code splitting", "caching", "metrics"],
        ),
        _t(
            "Explain the virtual DOM and how React uses it for performance optimization.",
            "JavaScript",
            0,
            ["virtual dom", "reconciliation", "diff", "performance"],
        ),
        _t(
            "How does the JavaScript event loop handle asynchronous code?",
            "JavaScript",
            0,
            ["call stack", "queue", "promise", "callback"],
        ),
        _t(
            "What are the key principles of web accessibility and how do you implement them?",
            "Design & UX",
            0,
            ["aria", "semantic html", "keyboard", "screen reader"],
        ),
    ],
    "backend-engineer": [
        _t(
            "Explain the CAP theorem and its implications for distributed systems.",
            "System Design",
            2,
            ["consistency", "availability", "partition tolerance", "trade-off"],
        ),
        _t(
            "How would you design a job queue that guarantees each job is processed at least once?",
            "System Design",
            1,
            ["retry", "idempotency", "acknowledg", "dead letter"],
        ),
        _t(
            "How would you design a RESTful API for a social media platform?",
            "API Development",
            0,
            ["rest", "endpoint", "authentication", "versioning"],
        ),
        _t(
            "How do you ensure API security and prevent common vulnerabilities?",
            "API Development",
            0,
            ["authentication", "authorization", "injection", "rate limit"],
        ),
        _t(
            "What strategies would you use to optimize database queries for a high-traffic application?",
            "Databases",
            1,
            ["index", "caching", "query optimization", "connection pool"],
        ),
    ],
    "devops-engineer": [
        _t(
            "Explain the principles of Infrastructure as Code and your experience with tools like Terraform.",
            "Infrastructure",
            0,
            ["declarative", "version control", "automation", "state"],
        ),
        _t(
            "What is container orchestration and how does Kubernetes solve scaling challenges?",
            "Infrastructure",
            1,
            ["container", "orchestration", "scaling", "kubernetes"],
        ),
        _t(
            "How would you design a CI/CD pipeline for a microservices application?",
            "CI/CD",
            1,
            ["build", "testing", "deployment", "rollback"],
        ),
        _t(
            "Describe your approach to monitoring and alerting for production systems.",
            "Monitoring",
            0,
            ["metrics", "logs", "alert", "dashboard"],
        ),
    ],
}


def skill_templates(role: JobRole) -> List[QuestionTemplate]:
    """Generic prompts built from the role's technical skills.

    Skills are spread across the role's technical categories in weight order so
    every category has fallback material once the curated templates run out.
    """

    categories = sorted(
        (category for category in role.question_categories if category.technical_focus),
        key=lambda category: category.weight,
        reverse=True,
    )
    if not categories:
        return []
    templates: List[QuestionTemplate] = []
    for index, skill in enumerate(role.technical_skills):
        category = categories[index % len(categories)].name
        templates.append(
            _t(
                f"Walk me through how you have applied {skill} in a recent piece of work. "
                "What approach did you take, and what trade-offs did you weigh?",
                category,
                0,
                ["approach", "trade-off", "result"],
            )
        )
    return templates


def technical_templates(role: JobRole) -> List[QuestionTemplate]:
    return list(ROLE_TEMPLATES.get(role.id, [])) + skill_templates(role)


__all__ = ["ROLE_TEMPLATES", "skill_templates", "technical_templates"]
