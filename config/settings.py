"""
Configuration settings loader.
Loads environment variables from the project .env file and exposes the
market-data credentials, provider choice and signal store location.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from .api_key_manager import APIKeyManager
from .constants import DATA_SIGNALS

# Load environment variables from .env
project_root = Path(__file__).parent.parent
env_path = project_root / '.env'
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings. Every key is optional; providers degrade to unavailable."""

    def __init__(self):
        self.manager = APIKeyManager()
        self.manager.register('POLYGON', os.getenv('POLYGON_API_KEY'))

        self.MARKET_DATA_PROVIDER = os.getenv('MARKET_DATA_PROVIDER', 'yahoo').lower()
        self.SIGNAL_STORE_DIR = Path(
            os.getenv('SIGNAL_STORE_DIR', str(project_root / DATA_SIGNALS))
        )

    @property
    def POLYGON_API_KEY(self) -> str | None:
        return self.manager.get('POLYGON')

    def has_polygon_key(self) -> bool:
        return self.manager.has_key('POLYGON')

    def rotate_keys(self, seen_index: Optional[int] = None) -> int:
        """
        Rotate to the next configured key set.
        Used by the Polygon provider after a failed request.
        """
        return self.manager.rotate(seen_index)

    @staticmethod
    def mask_api_key(api_key: str) -> str:
        """
        Mask API key for secure logging.
        Shows only first 4 and last 4 characters.

        Args:
            api_key: The API key to mask

        Returns:
            Masked API key (e.g., 'ltwM...I4ha')
        """
        if not api_key or len(api_key) < 8:
            return "****"
        return f"{api_key[:4]}...{api_key[-4:]}"


# Global settings instance
settings = Settings()
