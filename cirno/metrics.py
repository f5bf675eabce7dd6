"""
Cirno Evaluation Metrics

Per-run evaluation metrics and a logger that aggregates them:
- Step, print and depth counters for each run
- Summary statistics across runs
- CSV/JSON export
"""

import csv
import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Union

import numpy as np

from .core import iter_nodes

logger = logging.getLogger(__name__)


@dataclass
class EvaluationMetrics:
    """Metrics for a single top-level evaluation."""
    steps: int
    prints: int
    chars_emitted: int
    max_depth: int
    node_count: int
    elapsed_seconds: float


def count_nodes(expr: Any) -> int:
    """Count the nodes of an expression tree."""
    return sum(1 for _ in iter_nodes(expr))


class MetricsLogger:
    """
    Collects EvaluationMetrics across runs.

    Nothing is written to disk until save_json() or save_csv() is called.
    """

    def __init__(self, experiment_name: str = "cirno_run"):
        self.experiment_name = experiment_name
        self.history: List[EvaluationMetrics] = []

    def log_run(self, metrics: EvaluationMetrics) -> None:
        """Record metrics for one run."""
        self.history.append(metrics)
        logger.debug("Run %d: %d steps, %d prints", len(self.history), metrics.steps, metrics.prints)

    def summary(self) -> Dict[str, Dict[str, float]]:
        """
        Compute count/mean/std/max for every metric field.

        Returns:
            Mapping of field name to its statistics; empty if no runs were logged
        """
        if not self.history:
            return {}

        stats = {}
        for f in fields(EvaluationMetrics):
            values = np.array([getattr(m, f.name) for m in self.history], dtype=float)
            stats[f.name] = {
                'count': int(values.size),
                'mean': float(np.mean(values)),
                'std': float(np.std(values)),
                'max': float(np.max(values)),
            }
        return stats

    def save_json(self, path: Union[str, Path]) -> Path:
        """Write history and summary to a JSON file."""
        path = Path(path)
        data = {
            'experiment_name': self.experiment_name,
            'total_runs': len(self.history),
            'summary': self.summary(),
            'metrics': [asdict(m) for m in self.history],
        }
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
        return path

    def save_csv(self, path: Union[str, Path]) -> Path:
        """Write one row per run to a CSV file."""
        path = Path(path)
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow([f.name for f in fields(EvaluationMetrics)])
            for m in self.history:
                writer.writerow(asdict(m).values())
        return path
