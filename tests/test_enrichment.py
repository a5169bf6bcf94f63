"""Tests for demo enrichment and avatar URLs."""

from urllib.parse import parse_qs, urlparse

from core.avatars import dicebear_avatar_url, professional_avatar_url, ui_avatar_url
from core.domain.models import SalaryRange, Skill, Talent
from core.services.enrichment import TalentEnricher, generate_mock_talents


def _bare(talent_id="s1", first="Ana", last="Pérez"):
    return Talent(id=talent_id, first_name=first, last_name=last, email=f"{first.lower()}@example.com")


def test_same_seed_same_output():
    """Test enrichment is reproducible with a fixed seed."""
    a = TalentEnricher(seed=42).enhance(_bare(), 0)
    b = TalentEnricher(seed=42).enhance(_bare(), 0)
    assert a == b


def test_seeded_output_independent_of_call_order():
    """Test each record gets the same content regardless of processing order."""
    enricher = TalentEnricher(seed=3)
    one, two = _bare("s1"), _bare("s2", "Bo", "Li")

    forward = enricher.enhance_many([one, two])
    alone = TalentEnricher(seed=3).enhance(two, 1)
    assert forward[1] == alone


def test_fills_missing_fields_within_bounds():
    """Test generated fields respect their ranges."""
    talent = TalentEnricher(seed=1).enhance(_bare(), 5)

    assert 5 <= len(talent.skills) <= 10
    assert all(2 <= s.level <= 5 for s in talent.skills)
    assert 1 <= len(talent.languages) <= 3
    assert len(talent.certifications) <= 3
    assert talent.score is not None and talent.score <= 100
    assert talent.years_of_experience is not None and talent.years_of_experience >= 1
    assert talent.salary.max > talent.salary.min
    assert talent.hourly_rate.startswith("$") and talent.hourly_rate.endswith("/hr")
    assert talent.availability in {"Immediate", "1 week", "2 weeks notice", "1 month notice", "Flexible"}
    assert talent.linkedin == "https://linkedin.com/in/ana-pérez"
    assert talent.avatar.startswith("https://")


def test_backend_values_win():
    """Test fields present on the record are never replaced."""
    original = Talent(
        id="s9",
        first_name="Eva",
        last_name="Ruiz",
        email="eva@example.com",
        skills=[Skill(name="Go", level=4)],
        bio="Real bio",
        score=12,
        years_of_experience=0,
        salary=SalaryRange(min=1, max=2),
        linkedin="https://linkedin.com/in/real",
        avatar="https://cdn.test/eva.png",
    )
    enriched = TalentEnricher(seed=9).enhance(original, 0)

    assert [s.name for s in enriched.skills] == ["Go"]
    assert enriched.bio == "Real bio"
    assert enriched.score == 12
    assert enriched.years_of_experience == 0
    assert enriched.salary == SalaryRange(min=1, max=2)
    assert enriched.linkedin == "https://linkedin.com/in/real"
    assert enriched.avatar == "https://cdn.test/eva.png"


def test_defaults_for_empty_identity():
    """Test placeholder identity values for empty records."""
    enriched = TalentEnricher(seed=0).enhance(Talent(id=""), 4)
    assert enriched.id == "talent-4"
    assert enriched.first_name == "Unknown"
    assert enriched.email == "email@example.com"


def test_generate_mock_talents():
    """Test placeholder records."""
    talents = generate_mock_talents(3)
    assert [t.id for t in talents] == ["mock-talent-0", "mock-talent-1", "mock-talent-2"]
    assert talents[2].email == "test2@example.com"
    assert talents[1].full_name == "Test User1"
    assert generate_mock_talents(0) == []


def test_ui_avatar_url_parameters():
    """Test the UI Avatars URL."""
    url = urlparse(ui_avatar_url("Ana Pérez", size=64))
    query = parse_qs(url.query)
    assert url.netloc == "ui-avatars.com"
    assert query["name"] == ["Ana Pérez"]
    assert query["size"] == ["64"]
    assert query["background"] == ["0D6661"]


def test_dicebear_and_professional_avatars():
    """Test DiceBear URLs and the stable professional variant."""
    assert dicebear_avatar_url("Ana", style="avataaars").startswith("https://api.dicebear.com/7.x/avataaars/svg?")
    assert professional_avatar_url("Ana", "Pérez", 2) == professional_avatar_url("Ana", "Pérez", 2)
