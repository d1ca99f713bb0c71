"""
Filter dimension identifiers.

Callers name dimensions in several ways: snake_case vocabulary keys
("company_stage"), camelCase UI keys ("companyStage") and database column
names ("seniority_level"). FilterDimension.from_name() accepts all of them.
"""

import re
from enum import Enum
from typing import Optional, Union


class FilterDimension(str, Enum):
    """One faceted filter of the job board."""

    SENIORITY = "seniority"
    LOCATION = "location"
    WORK_ARRANGEMENT = "work_arrangement"
    COMPANY_STAGE = "company_stage"
    PRODUCT_LIFECYCLE = "product_lifecycle"
    PRODUCT_DOMAIN = "product_domain"
    MANAGEMENT_SCOPE = "management_scope"
    INDUSTRY_VERTICAL = "industry_vertical"
    EXPERIENCE_BUCKET = "experience_bucket"
    DOMAIN_EXPERTISE = "domain_expertise"

    @classmethod
    def from_name(cls, name: Union[str, "FilterDimension", None]) -> Optional["FilterDimension"]:
        """
        Resolve a dimension from any of its spellings.

        Args:
            name: Enum member, snake_case, camelCase or column name

        Returns:
            Matching dimension, or None if the name is unknown
        """
        if isinstance(name, cls):
            return name
        if not name:
            return None

        key = _snake_case(str(name))
        if key in cls._value2member_map_:
            return cls(key)
        return DIMENSION_ALIASES.get(key)


def _snake_case(name: str) -> str:
    # "companyStage" -> "company_stage", "Work-Arrangement" -> "work_arrangement"
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name.strip())
    return re.sub(r"[\s\-]+", "_", name).lower()


# Database column and legacy names
DIMENSION_ALIASES = {
    "seniority_level": FilterDimension.SENIORITY,
    "level": FilterDimension.SENIORITY,
    "location_metro": FilterDimension.LOCATION,
    "location_city": FilterDimension.LOCATION,
    "metro": FilterDimension.LOCATION,
    "city": FilterDimension.LOCATION,
    "remote_policy": FilterDimension.WORK_ARRANGEMENT,
    "stage": FilterDimension.COMPANY_STAGE,
    "product_lifecycle_focus": FilterDimension.PRODUCT_LIFECYCLE,
    "lifecycle": FilterDimension.PRODUCT_LIFECYCLE,
    "reporting_structure": FilterDimension.MANAGEMENT_SCOPE,
    "industry": FilterDimension.INDUSTRY_VERTICAL,
    "experience": FilterDimension.EXPERIENCE_BUCKET,
    "years_experience": FilterDimension.EXPERIENCE_BUCKET,
}
