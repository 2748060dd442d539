"""Error tracking and aggregation for refresh cycles."""

from collections import defaultdict
from datetime import datetime
from typing import Dict, Optional
import logging


class RefreshErrorTracker:
    """Track refresh failures across cycles without interrupting them."""

    def __init__(self, max_samples: int = 3):
        """Initialize error tracker.

        Args:
            max_samples: Maximum number of samples to store per error type
        """
        self.error_counts = defaultdict(int)
        self.error_samples = defaultdict(list)
        self.max_samples = max_samples
        self.consecutive_failures = 0
        self.last_error: Optional[str] = None
        self.last_failure_at: Optional[datetime] = None

    def add_error(self, error_type: str, message: str, context: Optional[Dict] = None) -> None:
        """Record a failed cycle.

        Args:
            error_type: Category/type of error
            message: Error message
            context: Optional context data for the error
        """
        self.error_counts[error_type] += 1
        self.consecutive_failures += 1
        self.last_error = message
        self.last_failure_at = datetime.now()

        if len(self.error_samples[error_type]) < self.max_samples:
            self.error_samples[error_type].append({
                'message': message,
                'context': context or {}
            })

    def record_success(self) -> None:
        """Reset the consecutive failure streak after a successful cycle."""
        self.consecutive_failures = 0

    @property
    def total_errors(self) -> int:
        return sum(self.error_counts.values())

    def get_summary(self) -> Dict:
        """Get error summary.

        Returns:
            Dict containing error counts, samples and the current failure streak
        """
        return {
            'counts': dict(self.error_counts),
            'samples': dict(self.error_samples),
            'consecutive_failures': self.consecutive_failures,
            'last_error': self.last_error
        }

    def log_summary(self, logger: logging.Logger) -> None:
        """Log error summary.

        Args:
            logger: Logger to use for output
        """
        if not self.error_counts:
            return

        logger.warning("Refresh error summary:")
        for error_type, count in self.error_counts.items():
            logger.warning(f"{error_type} ({count} occurrences):")
            for i, sample in enumerate(self.error_samples[error_type], 1):
                logger.warning(f"  Sample {i}: {sample['message']}")
                for key, value in sample['context'].items():
                    logger.warning(f"    {key}: {value}")
