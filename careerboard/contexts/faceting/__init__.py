"""
Faceting Context

Responsibilities:
- Maps raw filter values to canonical display labels per dimension
- Maps selected labels back to the raw values to query for
- Filters placeholder and job-title values out of locations
- Builds display tags from structured job fields

Owns: vocabulary.yaml (canonical labels, aliases, shared special cases, skill tables)
Never: Parses description markup (see intake context)
"""

from careerboard.contexts.faceting.dimensions import FilterDimension
from careerboard.contexts.faceting.exceptions import VocabularyConfigError
from careerboard.contexts.faceting.formatters import (
    filter_valid_locations,
    format_label,
    format_value,
    get_canonical_labels,
    is_valid_location,
    reverse_format,
)
from careerboard.contexts.faceting.tag_extraction import (
    Tag,
    TagCategory,
    TagSource,
    extract_tags,
    filter_tags_by_category,
    tag_from_url_param,
    tag_to_url_param,
)
from careerboard.contexts.faceting.vocabulary import clear_vocabulary_cache, load_vocabulary

__all__ = [
    "FilterDimension",
    "Tag",
    "TagCategory",
    "TagSource",
    "VocabularyConfigError",
    "clear_vocabulary_cache",
    "extract_tags",
    "filter_tags_by_category",
    "filter_valid_locations",
    "format_label",
    "format_value",
    "get_canonical_labels",
    "is_valid_location",
    "load_vocabulary",
    "reverse_format",
    "tag_from_url_param",
    "tag_to_url_param",
]
