"""
CAREERBOARD - normalization core for a product-management job board

Turns inconsistently formatted job listings into data a faceted job board can
render and filter on.

Architecture:
- Intake Context: Job-description block parsing, section extraction, previews
- Faceting Context: Filter value normalization, reverse mapping, display tags
"""

__version__ = "0.1.0"
