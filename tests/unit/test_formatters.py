"""Unit tests for forward filter value formatting."""

import pytest

from careerboard.contexts.faceting.dimensions import FilterDimension
from careerboard.contexts.faceting.formatters import (
    filter_valid_locations,
    format_label,
    format_value,
    get_canonical_labels,
    is_valid_location,
)

WORK_ARRANGEMENTS = {"Remote", "Hybrid", "On-site"}


@pytest.mark.unit
class TestFormatValue:
    """Dimension-specific formatting."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_is_none(self, raw):
        assert format_value(raw, "seniority") is None

    def test_generic_title_case(self):
        assert format_value("series_d_plus", "companyStage") == "Series D Plus"
        assert format_value("bootstrapped_company", "company_stage") == "Bootstrapped Company"

    def test_alias_table(self):
        assert format_value("pre_ipo", "companyStage") == "Pre-IPO"
        assert format_value("series_e", "companyStage") == "Series D Plus"
        assert format_value("zero_to_one", "productLifecycle") == "Zero to One"

    def test_shared_special_cases(self):
        assert format_value("b2b2c", "productDomain") == "B2B2C"
        assert format_value("reports_to_ceo", "reporting_structure") == "Reports to CEO"

    def test_dimension_alias_beats_shared_table(self):
        """Industry spells FinTech its own way."""
        assert format_value("fintech", "industryVertical") == "FinTech"
        assert format_value("fintech", "productDomain") == "Fintech"

    def test_key_normalization(self):
        """Case, hyphens, underscores and repeated spaces do not matter."""
        assert format_value("Fully-Remote", "workArrangement") == "Remote"
        assert format_value("  SERIES   d_plus ", "companyStage") == "Series D Plus"

    def test_unknown_dimension_uses_generic_formatter(self):
        assert format_value("user_growth", "favoriteColor") == "User Growth"
        assert format_value("api_gateway", "favoriteColor") == "API Gateway"

    def test_experience_bucket(self):
        assert format_value("10+", "experienceBucket") == "10+ Years"
        assert format_value("3_5", "experience") == "3-5 Years"


@pytest.mark.unit
class TestSeniority:
    """Seniority aliases and keyword rules."""

    @pytest.mark.parametrize(
        "raw, label",
        [
            ("senior", "Senior Product Manager"),
            ("Principal PM", "Staff Product Manager"),
            ("Sr. Product Manager, Growth", "Senior Product Manager"),
            ("Group Product Manager", "Director"),
            ("Senior Director, Product", "Director"),
            ("Head of Product", "CPO"),
            ("Junior Product Manager - Payments", "Associate Product Manager"),
            ("VP, Product", "VP"),
            ("Product Manager II", "Product Manager"),
        ],
    )
    def test_levels(self, raw, label):
        assert format_value(raw, FilterDimension.SENIORITY) == label

    def test_unmatched_falls_back_to_title_case(self):
        assert format_value("founding_team", "seniority") == "Founding Team"


@pytest.mark.unit
class TestLocation:
    """Location aliases, metro detection and validity."""

    @pytest.mark.parametrize(
        "raw, label",
        [
            ("NYC", "New York"),
            ("San Francisco Bay Area", "San Francisco"),
            ("Greater Seattle Area", "Seattle"),
            ("Austin, TX", "Austin"),
            ("Remote - US", "Remote"),
            ("Silicon Valley, CA", "San Francisco"),
            ("Washington, D.C.", "Washington DC"),
            ("München", "Munich"),
        ],
    )
    def test_metros(self, raw, label):
        assert format_value(raw, "location") == label

    @pytest.mark.parametrize("raw", ["N/A", "tbd", "Multiple Locations", "12345", "x", "Senior Product Manager"])
    def test_invalid_locations_format_to_none(self, raw):
        assert format_value(raw, "location_metro") is None

    def test_unknown_place_title_cased(self):
        assert format_value("reykjavik", "location") == "Reykjavik"

    def test_is_valid_location(self):
        assert is_valid_location("Boston")
        assert is_valid_location("Remote - Anywhere")
        assert not is_valid_location(None)
        assert not is_valid_location("  ")
        assert not is_valid_location("Software Engineer")

    def test_filter_valid_locations_keeps_order(self):
        values = ["Denver", "n/a", "Berlin", "", "Various"]
        assert filter_valid_locations(values) == ["Denver", "Berlin"]


@pytest.mark.unit
class TestWorkArrangement:
    """Work arrangement always lands in one of three buckets."""

    @pytest.mark.parametrize(
        "raw, label",
        [
            ("fully_remote", "Remote"),
            ("remote_first", "Remote"),
            ("Remote (US)", "Remote"),
            ("Work from Home", "Remote"),
            ("hybrid", "Hybrid"),
            ("Hybrid - 3 days in office", "Hybrid"),
            ("flexible", "Hybrid"),
            ("onsite", "On-site"),
            ("In Office", "On-site"),
            ("Office in Austin", "On-site"),
        ],
    )
    def test_buckets(self, raw, label):
        assert format_value(raw, "workArrangement") == label

    @pytest.mark.parametrize("raw", ["banana", "4 days a week", "!!!", "Remote?", "office_first"])
    def test_never_leaves_the_three_buckets(self, raw):
        assert format_value(raw, "work_arrangement") in WORK_ARRANGEMENTS


@pytest.mark.unit
class TestCanonicalLabels:
    """Ordered label sets."""

    def test_work_arrangement_labels(self):
        assert get_canonical_labels("workArrangement") == ["Remote", "Hybrid", "On-site"]

    def test_location_labels_sorted_with_remote(self):
        labels = get_canonical_labels("location")
        assert "Remote" in labels
        assert "New York" in labels
        assert "London" in labels
        assert labels == sorted(labels)
        assert len(labels) == len(set(labels))

    def test_seniority_order(self):
        labels = get_canonical_labels("seniority")
        assert labels[0] == "Associate Product Manager"
        assert labels[-1] == "CPO"

    def test_unknown_dimension_raises(self):
        with pytest.raises(KeyError):
            get_canonical_labels("favoriteColor")


@pytest.mark.unit
class TestFormatLabel:
    """Generic label formatting used by tags."""

    def test_shared_table(self):
        assert format_label("revenue_arr") == "Revenue ARR"
        assert format_label("ai_ml") == "AI/ML"

    def test_camel_case_split(self):
        assert format_label("userGrowth") == "User Growth"
        assert format_label("productStrategy") == "Product Strategy"

    def test_acronym_tokens(self):
        assert format_label("saas_metrics") == "SaaS Metrics"

    def test_extra_table_first(self):
        assert format_label("api", extra={"api": "Public API"}) == "Public API"

    @pytest.mark.parametrize("text", [None, "", "  "])
    def test_blank(self, text):
        assert format_label(text) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, plain",
    [
        ("\ufb01ntech", "fintech"),
        ("\uff32\uff45\uff4d\uff4f\uff54\uff45", "remote"),
    ],
)
def test_compatibility_forms_match_plain_spelling(raw, plain):
    """Ligatures and full-width letters resolve like their plain spelling."""
    for dimension in ("domainExpertise", "workArrangement", "location"):
        assert format_value(raw, dimension) == format_value(plain, dimension)
