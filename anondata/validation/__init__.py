"""
Validation Module

Statistical checks on generated values:
- Classifier: fractions of values matching named predicates
- Distribution reports: tail fractions, KS test against uniform, summary stats
"""

from .quality import (
    Classifier,
    DistributionReport,
    assess_distribution,
    tail_classifier,
)

__all__ = [
    "Classifier",
    "DistributionReport",
    "assess_distribution",
    "tail_classifier",
]
