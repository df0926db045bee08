"""
Pterodactyl API Client

Handles communication with a Pterodactyl panel for listing and fetching
plugin jars on a managed server.
"""

import logging
from typing import Dict, List

import requests

from .config import API_TIMEOUT, DOWNLOAD_TIMEOUT, PTERODACTYL_PLUGINS_DIR

logger = logging.getLogger(__name__)


class PterodactylClient:
    """Client API access to the files of servers on a Pterodactyl panel"""

    def __init__(self, panel_url: str, api_key: str):
        """
        Args:
            panel_url: Base URL of the panel (e.g., https://panel.example.com)
            api_key: Client API key, file endpoints reject application keys
        """
        self.api_url = f"{panel_url.rstrip('/')}/api/client"

        if not api_key.startswith('ptlc_'):
            logger.warning("API key is not a client key (ptlc_), file listing will likely be refused")

        self.session = requests.Session()
        self.session.headers['Authorization'] = f'Bearer {api_key}'
        self.session.headers['Accept'] = 'application/json'

    def _get(self, endpoint: str, **params) -> Dict:
        """GET a client API endpoint and decode the JSON body"""
        try:
            response = self.session.get(f"{self.api_url}{endpoint}", params=params, timeout=API_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"✗ Panel request {endpoint} failed: {e}")
            raise

        return response.json()

    def list_files(self, server_id: str, directory: str = PTERODACTYL_PLUGINS_DIR) -> List[Dict]:
        """
        List files in a server directory

        Args:
            server_id: Server identifier
            directory: Remote directory

        Returns:
            List of file attribute dicts (name, size, is_file, ...)
        """
        logger.info(f"Listing {directory} on server: {server_id}")

        data = self._get(f'/servers/{server_id}/files/list', directory=directory)
        return [item.get('attributes', {}) for item in data.get('data', [])]

    def download_file(self, server_id: str, file_path: str) -> bytes:
        """
        Download a file from a server

        The panel answers with a signed URL which is then fetched directly.

        Args:
            server_id: Server identifier
            file_path: Absolute remote path of the file

        Returns:
            File contents
        """
        data = self._get(f'/servers/{server_id}/files/download', file=file_path)
        url = data.get('attributes', {}).get('url')

        if not url:
            raise requests.RequestException(f"No download URL returned for {file_path}")

        try:
            response = requests.get(url, timeout=DOWNLOAD_TIMEOUT)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            logger.error(f"Download failed for {file_path}: {e}")
            raise
