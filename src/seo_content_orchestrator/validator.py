"""
Validation of generated content against competitor benchmarks.
"""

import logging

from .models import Benchmarks, ValidationResult
from .text_analysis import (
    calculate_keyword_density,
    count_optimized_headings,
    count_terms_used,
    round_half_up,
)

logger = logging.getLogger(__name__)


def density_accuracy(actual: float, target: float) -> float:
    """
    Score how close the actual density is to the target.

    100 at equality, minus 10 points per percentage point of difference,
    floored at 0.
    """
    return round_half_up(max(0.0, 100.0 - abs(actual - target) * 10), 2)


def validate_content(
    content: str,
    keyword: str,
    benchmarks: Benchmarks,
    strip_punctuation: bool = True,
) -> ValidationResult:
    """
    Re-measure generated content with the same rules used on competitors.

    LSI keywords are matched case-insensitively, entities case-sensitively.
    """
    actual = calculate_keyword_density(content, keyword, strip_punctuation)
    result = ValidationResult(
        actual_density=actual,
        density_accuracy=density_accuracy(actual, benchmarks.average_keyword_density),
        heading_optimization=count_optimized_headings(content, keyword),
        lsi_keywords_used=count_terms_used(content, benchmarks.lsi_keywords),
        entities_integrated=count_terms_used(content, benchmarks.entities, case_sensitive=True),
    )
    logger.info(
        f"Validation: density {actual}% vs target {benchmarks.average_keyword_density}% "
        f"(accuracy {result.density_accuracy}), "
        f"{result.heading_optimization} optimized headings"
    )
    return result
