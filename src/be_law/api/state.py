from typing import Any, Dict, Optional
import threading
import time

from be_law.corpus.store import CorpusStore

# Corpus (read-only snapshot, opened once per process)
store: Optional[CorpusStore] = None
store_lock = threading.Lock()

# Validation Stats (for monitoring)
validation_stats: Dict[str, Any] = {
    'total_validations': 0,
    'valid': 0,
    'last_validation_time': None,
}

# Metrics
REQUEST_COUNT: Any = None
REQUEST_LATENCY: Any = None
CITATIONS_VALIDATED: Any = None


def update_validation_stats(valid: bool):
    """Update validation statistics for monitoring."""
    validation_stats['total_validations'] = int(validation_stats.get('total_validations') or 0) + 1
    if valid:
        validation_stats['valid'] = int(validation_stats.get('valid') or 0) + 1
    validation_stats['last_validation_time'] = time.time()
