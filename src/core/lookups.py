"""Tablas de id → nombre para sede, cohorte y stack.

El backend envía ids (UUID) en vez de nombres. Mientras no existan
endpoints de catálogo para estos campos, el panel deriva valores
deterministas desde la identidad del talento: el mismo talento siempre
cae en la misma sede/cohorte/stack, y la demo muestra variedad.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Sequence

SITE_LOOKUP: dict[str, str] = {
    "0130130e-408d-4dd4-bdf3-c80d486a8c63": "Anaheim, CA",
    "05b08603-36fb-4a96-8782-5efff726ffe3": "San Francisco, CA",
    "0f418f83-e831-472d-8aeb-7e61addfb194": "Bakersfield, CA",
    "39d0839e-ef24-4778-aedc-b55505d67d2a": "Sacramento, CA",
    "696c2ba6-a20f-4e3c-9dad-5c0605cf883a": "San Jose, CA",
    "8773276b-2d4c-4cdf-806d-540aed5f6be1": "San Diego, CA",
    "fd92477e-b20c-4774-b251-64ccaae23930": "Los Angeles, CA",
    "15248d99-e28a-4159-81dd-4434a45a64b9": "Houston, TX",
    "649720c0-a3c8-4509-9d22-3e2cf56a0fe5": "Austin, TX",
    "cd690d12-9e5b-4de3-afcd-319d1a5dcbfe": "Dallas, TX",
    "f14e4035-34eb-43ea-8d21-3d011ad8fbdd": "Miami, FL",
    "48240c7c-2b33-4b78-93c4-8f1234b4ad67": "Phoenix, AZ",
    "a6d5bf67-4936-487d-b4f2-d734a4cc2b14": "Denver, CO",
    "1984ea02-f440-499e-8031-b9994cea0714": "Seattle, WA",
    "199883e0-a18c-42f1-8a56-9338eaa0489d": "New York, NY",
    "3d3eccf6-ee06-4e25-804b-a1a45d006d17": "Boston, MA",
    "46e200a1-3ec3-4adf-8ee4-6d5770ce97b9": "Washington, DC",
    "57fdc8d6-cadb-4a0a-b215-edcc295418a6": "Portland, OR",
    "659e342d-b6d9-4882-97eb-1e8b6b5c105f": "Chicago, IL",
    "e46a9fb8-7737-4b6e-90e9-3555a0515e68": "Atlanta, GA",
    "024854f8-2c90-413f-be79-b5104bfed642": "Dublin, Ireland",
    "030286f4-453e-4326-9ee4-2749cde84fbc": "London, UK",
    "37d33efe-c389-4c38-b855-f83dbf530831": "Toronto, Canada",
    "526298d4-1ced-4264-8895-589735594d59": "Mexico City, Mexico",
    "ba3768fe-2748-4e4b-8416-2320921f1203": "Berlin, Germany",
    "e9cf9356-7c09-4d26-ae37-fec1dc4e8d51": "Barcelona, Spain",
    "c6e1e02d-5361-4b98-9c5b-8f3cd5c1c0b8": "Medellín",
    "d4750deb-da22-4e71-8f88-5de565955abf": "Barranquilla",
}

# Sede por defecto del backend; se ignora para no mostrar a todos en la misma ciudad.
DEFAULT_BACKEND_SITE_ID = "c6e1e02d-5361-4b98-9c5b-8f3cd5c1c0b8"

COHORT_LOOKUP: dict[str, str] = {
    "9dcebd91-973f-4670-8fce-6bd6ad0546fd": "Cohort 2",
    "adcebd91-973f-4670-8fce-6bd6ad0546fe": "Cohort 1",
    "bdcebd91-973f-4670-8fce-6bd6ad0546ff": "Cohort 3",
}

STACK_LOOKUP: dict[str, str] = {
    "7a2a63f9-a9e1-4b47-b954-001c8b669dae": "Technical Business Analyst",
    "8a2a63f9-a9e1-4b47-b954-001c8b669daf": "Full Stack Developer",
    "9a2a63f9-a9e1-4b47-b954-001c8b669db0": "Data Scientist",
    "aa2a63f9-a9e1-4b47-b954-001c8b669db1": "DevOps Engineer",
    "ba2a63f9-a9e1-4b47-b954-001c8b669db2": "UI/UX Designer",
    "ca2a63f9-a9e1-4b47-b954-001c8b669db3": "Project Manager",
    "da2a63f9-a9e1-4b47-b954-001c8b669db4": "QA Engineer",
    "ea2a63f9-a9e1-4b47-b954-001c8b669db5": "Security Analyst",
}

PRIMARY_LOCATIONS: tuple[str, ...] = (
    "San Francisco, CA",
    "New York, NY",
    "Austin, TX",
    "Seattle, WA",
    "Chicago, IL",
    "Boston, MA",
    "Denver, CO",
    "Los Angeles, CA",
    "Miami, FL",
    "Atlanta, GA",
    "Portland, OR",
    "San Diego, CA",
    "Phoenix, AZ",
    "Dallas, TX",
    "Washington, DC",
    "Remote",
    "Philadelphia, PA",
    "Houston, TX",
    "San Jose, CA",
    "Minneapolis, MN",
)

COHORTS: tuple[str, ...] = (
    "Cohort 2024-Q1",
    "Cohort 2024-Q2",
    "Cohort 2024-Q3",
    "Cohort 2024-Q4",
    "Cohort 2023-Q4",
    "Cohort 2023-Q3",
    "Spring 2024",
    "Summer 2024",
    "Fall 2024",
    "Winter 2024",
)

STACKS: tuple[str, ...] = (
    "Full Stack Developer",
    "Frontend Developer",
    "Backend Developer",
    "DevOps Engineer",
    "Data Scientist",
    "Machine Learning Engineer",
    "Cloud Architect",
    "Mobile Developer",
    "UI/UX Designer",
    "Product Manager",
    "Technical Lead",
    "Software Architect",
    "QA Engineer",
    "Security Engineer",
    "Data Engineer",
    "Site Reliability Engineer",
    "Business Analyst",
    "Scrum Master",
    "Solutions Architect",
    "Platform Engineer",
)


def string_hash(value: str) -> int:
    """Hash 32-bit con signo (h*31 + c sobre unidades UTF-16).

    Es el hash clásico de strings de Java/JS; se usa para que la selección
    sea estable entre ejecuciones (el `hash()` de Python está aleatorizado).
    """

    h = 0
    raw = value.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def pick_stable(options: Sequence[str], seed: str) -> str:
    return options[abs(string_hash(seed)) % len(options)]


def _field(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


def site_for(site_id: str | None = None, record: Mapping[str, Any] | None = None) -> str:
    if record is not None:
        seed = "".join(_field(record, k) for k in ("id", "email", "firstName", "lastName"))
        if not seed:
            return "Remote"
        return pick_stable(PRIMARY_LOCATIONS, seed)
    if site_id and site_id != DEFAULT_BACKEND_SITE_ID and site_id in SITE_LOOKUP:
        return SITE_LOOKUP[site_id]
    return "Remote"


def cohort_for(cohort_id: str | None = None, record: Mapping[str, Any] | None = None) -> str:
    if record is not None:
        return pick_stable(COHORTS, f"{_field(record, 'id')}{_field(record, 'email')}cohort")
    if cohort_id and cohort_id in COHORT_LOOKUP:
        return COHORT_LOOKUP[cohort_id]
    if cohort_id:
        return f"Cohort {cohort_id[:4]}"
    return "Cohort 2024"


def stack_for(stack_id: str | None = None, record: Mapping[str, Any] | None = None) -> str:
    if record is not None:
        return pick_stable(STACKS, f"{_field(record, 'id')}{_field(record, 'email')}stack")
    if stack_id and stack_id in STACK_LOOKUP:
        return STACK_LOOKUP[stack_id]
    return "Full Stack Developer"


def calculate_age(birth_date: str | None, *, today: date | None = None) -> int:
    """Edad en años; 25 si la fecha falta, es inválida o da un valor raro."""

    if not birth_date:
        return 25
    try:
        birth = date.fromisoformat(birth_date[:10])
    except ValueError:
        return 25
    today = today or date.today()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    if age < 18 or age > 70:
        return 25
    return age
