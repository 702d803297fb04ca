"""
Signal Store - write contract for generated signals plus a JSON-file backend.
"""

import json
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from config.settings import settings
from utils.logger import setup_logger
from signal_engine.models import ProcessedSignal

logger = setup_logger('signal_store')

STORE_FORMAT_VERSION = "1.0"


class SignalStore(ABC):
    """Storage collaborator consumed by the scan pipeline."""

    @abstractmethod
    def save_signal(self, signal: ProcessedSignal) -> bool:
        """
        Persist one signal.

        Returns:
            True on success, False on a handled failure. Implementations
            may also raise PersistenceError; the pipeline treats both alike.
        """


class JsonSignalStore(SignalStore):
    """
    Writes one JSON document per signal:
    {store_dir}/{YYYY-MM-DD}/signal_{TICKER}_{HHMMSS}_{microseconds}.json
    An existing document is never overwritten; a numeric suffix is added instead.
    """

    def __init__(self, store_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            store_dir: Root directory; defaults to settings.SIGNAL_STORE_DIR
        """
        self.store_dir = Path(store_dir) if store_dir else settings.SIGNAL_STORE_DIR
        self._lock = threading.Lock()

    def _signal_path(self, signal: ProcessedSignal) -> Path:
        created = signal.created_at
        folder = self.store_dir / created.strftime("%Y-%m-%d")
        stem = f"signal_{signal.ticker.upper()}_{created.strftime('%H%M%S_%f')}"
        path = folder / f"{stem}.json"
        suffix = 1
        while path.exists():
            suffix += 1
            path = folder / f"{stem}_{suffix}.json"
        return path

    def save_signal(self, signal: ProcessedSignal) -> bool:
        document = {
            "metadata": {
                "ticker": signal.ticker,
                "saved_at": datetime.now().isoformat(),
                "data_provenance": signal.data_provenance,
                "format_version": STORE_FORMAT_VERSION,
            },
            "signal": signal.model_dump(mode='json'),
        }

        try:
            with self._lock:
                output_path = self._signal_path(signal)
                output_path.parent.mkdir(parents=True, exist_ok=True)
                with open(output_path, 'x', encoding='utf-8') as f:
                    json.dump(document, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save signal for {signal.ticker}: {e}")
            return False

        logger.info(f"Saved signal for {signal.ticker} to {output_path}")
        return True
