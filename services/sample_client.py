"""
Sample statement loader.
Fetches the sample statement from a configured URL, or reads the bundled copy.
"""
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import Settings, get_settings
from core.exceptions import BatchReadFailure
from core.logger import setup_logger

logger = setup_logger(__name__)


class SampleClient:
    """Loads the sample card statement as raw bytes."""
    
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
    
    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((requests.exceptions.ConnectionError, requests.exceptions.Timeout)),
        reraise=True
    )
    def _download(self, url: str) -> bytes:
        response = requests.get(url, timeout=self.settings.sample_timeout)
        response.raise_for_status()
        return response.content
    
    def fetch(self) -> Tuple[str, bytes]:
        """
        Load the sample statement.
        
        Returns:
            Tuple of (source label, raw bytes)
        
        Raises:
            BatchReadFailure: If the download or file read fails
        """
        url = self.settings.sample_url
        if url:
            label = Path(urlparse(url).path).name or "sample.csv"
            try:
                content = self._download(url)
            except requests.exceptions.RequestException as e:
                logger.error(f"Failed to fetch sample statement from {url}: {e}")
                raise BatchReadFailure(
                    "Failed to fetch sample statement",
                    details={"url": url, "error": str(e)}
                )
            logger.info(f"Fetched sample statement {label} ({len(content)} bytes)")
            return label, content
        
        path = Path(self.settings.sample_file_path)
        try:
            content = path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read sample statement {path}: {e}")
            raise BatchReadFailure(
                "Failed to read sample statement",
                details={"file_path": str(path), "error": str(e)}
            )
        logger.info(f"Loaded sample statement {path.name} ({len(content)} bytes)")
        return path.name, content
