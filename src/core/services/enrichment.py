"""Enriquecimiento de perfiles con contenido de demostración.

El backend devuelve perfiles muy escuetos (nombre, email, ids). Para que
el panel sea presentable se completan los campos vacíos con datos
plausibles. Los valores que sí vienen del backend nunca se tocan.

Reproducibilidad: con `seed` fijo, cada talento recibe siempre el mismo
contenido (el generador se deriva de seed + id + índice), sin importar el
orden en que se procesen.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

from adapters.normalizers import language_code
from core.avatars import professional_avatar_url
from core.domain.models import SalaryRange, Skill, Talent, TalentLanguage

T = TypeVar("T")

CATEGORIES: tuple[str, ...] = ("publicHealth", "it", "cybersecurity")

SKILLS_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "publicHealth": (
        "Epidemiology",
        "Biostatistics",
        "Health Policy",
        "Program Evaluation",
        "Data Analysis",
        "Research Methods",
        "Community Engagement",
        "Grant Writing",
        "Disease Surveillance",
        "Health Communication",
        "SAS",
        "R",
        "SPSS",
        "Environmental Health",
        "Global Health",
    ),
    "it": (
        "JavaScript",
        "TypeScript",
        "React",
        "Node.js",
        "Python",
        "Java",
        "AWS",
        "Azure",
        "Docker",
        "Kubernetes",
        "MongoDB",
        "PostgreSQL",
        "GraphQL",
        "REST APIs",
        "CI/CD",
    ),
    "cybersecurity": (
        "Network Security",
        "Penetration Testing",
        "SIEM",
        "Incident Response",
        "Vulnerability Assessment",
        "Security Auditing",
        "Compliance",
        "Risk Management",
    ),
}

CERTIFICATIONS_BY_CATEGORY: dict[str, tuple[str, ...]] = {
    "publicHealth": (
        "Certified in Public Health (CPH)",
        "Certified Health Education Specialist (CHES)",
        "FEMA Emergency Management",
        "Project Management Professional (PMP)",
    ),
    "it": (
        "AWS Certified Solutions Architect",
        "Microsoft Azure Developer",
        "Google Cloud Professional",
        "Certified Kubernetes Administrator",
    ),
    "cybersecurity": (
        "CISSP - Certified Information Systems Security Professional",
        "CEH - Certified Ethical Hacker",
        "CompTIA Security+",
        "GCIH - GIAC Certified Incident Handler",
    ),
}

LANGUAGE_LEVELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("English", ("Native", "Fluent", "Professional")),
    ("Spanish", ("Fluent", "Professional", "Conversational")),
    ("French", ("Professional", "Conversational")),
    ("Mandarin", ("Conversational", "Basic")),
    ("Portuguese", ("Professional", "Conversational")),
)

EXPERIENCE_TEMPLATES: tuple[str, ...] = (
    "Experienced professional with {years} years in the industry.",
    "Seasoned expert bringing {years}+ years of hands-on experience.",
    "{years} years of progressive experience in challenging environments.",
    "Veteran professional with {years} years of proven success.",
    "Accomplished specialist with {years} years of industry expertise.",
)

ACHIEVEMENTS: tuple[str, ...] = (
    "Led cross-functional teams to deliver complex projects on time and under budget.",
    "Implemented innovative solutions that improved efficiency by over 40%.",
    "Managed portfolios worth over $5M with consistent positive outcomes.",
    "Received multiple awards for excellence in service delivery.",
    "Published research in peer-reviewed journals and presented at international conferences.",
    "Developed and mentored teams of 10+ professionals.",
    "Spearheaded digital transformation initiatives across the organization.",
    "Achieved 99.9% uptime for critical systems and infrastructure.",
)

AVAILABILITIES: tuple[str, ...] = ("Immediate", "1 week", "2 weeks notice", "1 month notice", "Flexible")

BASE_SALARY: dict[str, int] = {"publicHealth": 65_000, "it": 85_000, "cybersecurity": 95_000}
WORK_HOURS_PER_YEAR = 2080
MAX_SCORE = 100

# Mandarin no está en la tabla general de códigos.
_EXTRA_LANGUAGE_CODES = {"Mandarin": "ZH"}


def _first_code(value: str | None, default: int) -> int:
    return ord(value[0]) if value else default


class TalentEnricher:
    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._shared = random.Random(seed)

    def _rng_for(self, talent: Talent, index: int | None) -> random.Random:
        if self.seed is None:
            return self._shared
        return random.Random(f"{self.seed}:{talent.id}:{index}")

    @staticmethod
    def _sample(rng: random.Random, options: Sequence[T], count: int) -> list[T]:
        return rng.sample(list(options), min(count, len(options)))

    @staticmethod
    def category_for(talent: Talent, index: int | None) -> str:
        return CATEGORIES[abs((index or 0) + _first_code(talent.first_name, 0)) % len(CATEGORIES)]

    def enhance(self, talent: Talent, index: int | None = None) -> Talent:
        rng = self._rng_for(talent, index)
        category = self.category_for(talent, index)
        first = talent.first_name or ""
        last = talent.surname

        base_years = (_first_code(first, 100) + _first_code(talent.last_name or last, 100)) % 15
        years = base_years + rng.randint(1, 5)

        salary_min = BASE_SALARY[category] + years * rng.randint(3000, 5000) + rng.randint(-10_000, 25_000)
        salary_max = salary_min + rng.randint(20_000, 45_000)
        hourly_rate = f"${salary_min // WORK_HOURS_PER_YEAR}-{salary_max // WORK_HOURS_PER_YEAR}/hr"

        skill_count = rng.randint(5, 10)
        skills = talent.skills or [
            Skill(id=f"skill-{i}", name=name, level=rng.randint(2, 5))
            for i, name in enumerate(self._sample(rng, SKILLS_BY_CATEGORY[category], skill_count))
        ]

        language_count = rng.randint(1, 3)
        languages = talent.languages or [
            TalentLanguage(
                id=f"lang-{i}",
                code=_EXTRA_LANGUAGE_CODES.get(name) or language_code(name),
                name=name,
                level=rng.choice(levels),
            )
            for i, (name, levels) in enumerate(self._sample(rng, LANGUAGE_LEVELS, language_count))
        ]

        cert_count = rng.randint(0, 3)
        certifications = talent.certifications or self._sample(
            rng, CERTIFICATIONS_BY_CATEGORY[category], cert_count
        )

        template = rng.choice(EXPERIENCE_TEMPLATES)
        achievement = rng.choice(ACHIEVEMENTS)
        bio = talent.bio or f"{template.replace('{years}', str(years))} {achievement}"

        availability = talent.availability or rng.choice(AVAILABILITIES)
        score = min(MAX_SCORE, 65 + years * 2 + len(skills) + rng.randint(-5, 10))

        handle_first = first.lower()
        handle_last = last.lower()
        wants_github = rng.random() > 0.3
        wants_portfolio = rng.random() > 0.5

        avatar = talent.avatar or professional_avatar_url(
            first or "Unknown",
            talent.last_name or last or "User",
            index,
        )

        update = {
            "id": talent.id or f"talent-{index}",
            "first_name": first or "Unknown",
            "email": talent.email or "email@example.com",
            "avatar": avatar,
            "bio": bio,
            "years_of_experience": (
                talent.years_of_experience if talent.years_of_experience is not None else years
            ),
            "skills": skills,
            "languages": languages,
            "certifications": certifications,
            "availability": availability,
            "hourly_rate": talent.hourly_rate or hourly_rate,
            "salary": talent.salary or SalaryRange(min=salary_min, max=salary_max),
            "score": talent.score if talent.score is not None else float(score),
            "linkedin": talent.linkedin or f"https://linkedin.com/in/{handle_first}-{handle_last}",
            "github": talent.github
            or (f"https://github.com/{handle_first}{handle_last}" if category == "it" and wants_github else None),
            "portfolio": talent.portfolio
            or (f"https://portfolio.{handle_first}.com" if wants_portfolio else None),
        }
        return talent.model_copy(update=update)

    def enhance_many(self, talents: Sequence[Talent], *, offset: int = 0) -> list[Talent]:
        return [self.enhance(t, offset + i) for i, t in enumerate(talents)]


def generate_mock_talents(count: int) -> list[Talent]:
    """Registros mínimos para trabajar sin backend."""

    return [
        Talent(
            id=f"mock-talent-{i}",
            first_name="Test",
            last_name=f"User{i}",
            email=f"test{i}@example.com",
            status=1,
            status_id=1,
        )
        for i in range(count)
    ]
