# quality.py: statistical checks on generated values

import pandas as pd
import numpy as np
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass, field
from scipy import stats
import logging

from ..config import DEFAULT_SEED
from ..distribution import Distribution
from ..utils import SeedManager

logger = logging.getLogger(__name__)

DEFAULT_RUNS = 1000

LOW_TAIL = "below_0.15"
HIGH_TAIL = "above_0.85"
NEGATIVE = "negative"


# =========================
# CLASSIFIER
# =========================

class Classifier:
    """
    Counts how often generated values satisfy named predicates

    Classifications are fixed once the first value is classified; each
    fraction is matches / values classified.
    """

    def __init__(self):
        self._predicates: Dict[str, Callable[[Any], bool]] = {}
        self._matches: Dict[str, int] = {}
        self.count = 0

    def add_classification(self, name: str, predicate: Callable[[Any], bool]):
        if not name:
            raise ValueError("Classification name must not be empty")
        if not callable(predicate):
            raise ValueError(f"Predicate for '{name}' must be callable")
        if self.count > 0:
            raise RuntimeError("Cannot add classifications after classifying any values")
        if name in self._predicates:
            raise ValueError(f"Classification '{name}' already exists")

        self._predicates[name] = predicate
        self._matches[name] = 0

    def classify(self, value: Any):
        for name, predicate in self._predicates.items():
            if predicate(value):
                self._matches[name] += 1
        self.count += 1

    def classify_many(self, producer: Callable[[], Any], runs: int = DEFAULT_RUNS):
        """Classify runs values drawn from producer()"""
        if runs < 0:
            raise ValueError(f"runs must not be negative, got {runs}")
        for _ in range(runs):
            self.classify(producer())

    def __getitem__(self, name: str) -> float:
        matches = self._matches[name]
        return 0.0 if self.count == 0 else matches / self.count

    def fractions(self) -> pd.Series:
        return pd.Series({name: self[name] for name in self._predicates}, dtype=float, name="fraction")


# =========================
# DISTRIBUTION REPORT
# =========================

@dataclass
class DistributionReport:
    distribution: Distribution
    runs: int
    fractions: Dict[str, float] = field(default_factory=dict)
    ks_statistic: float = 0.0
    ks_pvalue: float = 1.0
    summary: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distribution": self.distribution.value,
            "runs": self.runs,
            "fractions": self.fractions,
            "ks_statistic": self.ks_statistic,
            "ks_pvalue": self.ks_pvalue,
            "summary": self.summary,
        }

    def to_frame(self) -> pd.DataFrame:
        rows = [{"metric": name, "value": value} for name, value in self.fractions.items()]
        rows.append({"metric": "ks_statistic", "value": self.ks_statistic})
        rows.append({"metric": "ks_pvalue", "value": self.ks_pvalue})
        rows.extend({"metric": name, "value": value} for name, value in self.summary.items())
        return pd.DataFrame(rows)


def tail_classifier() -> Classifier:
    """Classifier with the low tail, high tail and negative buckets"""
    classifier = Classifier()
    classifier.add_classification(LOW_TAIL, lambda d: d < 0.15)
    classifier.add_classification(HIGH_TAIL, lambda d: d > 0.85)
    classifier.add_classification(NEGATIVE, lambda d: d < 0)
    return classifier


def assess_distribution(
    distribution,
    runs: int = DEFAULT_RUNS,
    seed: Optional[int] = DEFAULT_SEED
) -> DistributionReport:
    """
    Sample a distribution and describe its shape

    Args:
        distribution: Distribution (or its name)
        runs: Number of raw samples
        seed: Seed for the sampling random source

    Returns:
        Tail fractions, a Kolmogorov-Smirnov test against uniform and
        summary statistics
    """
    distribution = Distribution.parse(distribution)
    if runs <= 0:
        raise ValueError(f"runs must be positive, got {runs}")

    random = SeedManager(seed).create_generator()
    samples = np.array([distribution.sample(random) for _ in range(runs)])

    classifier = tail_classifier()
    for value in samples:
        classifier.classify(value)

    ks_stat, ks_p = stats.kstest(samples, "uniform")
    frame = pd.Series(samples)

    report = DistributionReport(
        distribution=distribution,
        runs=runs,
        fractions=classifier.fractions().to_dict(),
        ks_statistic=float(ks_stat),
        ks_pvalue=float(ks_p),
        summary={
            "mean": float(frame.mean()),
            "std": float(frame.std()),
            "min": float(frame.min()),
            "max": float(frame.max()),
        },
    )

    logger.info(
        f"{distribution.value}: low={report.fractions[LOW_TAIL]:.3f} "
        f"high={report.fractions[HIGH_TAIL]:.3f} ks={report.ks_statistic:.3f}"
    )
    return report
