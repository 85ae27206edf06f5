"""
JSON file credential storage.

Reads a single profile from a JSON file; environment variables override
individual fields so CI can run without a file on disk.
"""
from pathlib import Path
from typing import Optional, Union, Dict
import json
import os

from .protocols import CredentialStore
from .models import Credentials
from ..exceptions import ConfigError
from ..logging import get_logger

ENV_FIELDS: Dict[str, str] = {
    'consumer_key': 'TON_CONSUMER_KEY',
    'consumer_secret': 'TON_CONSUMER_SECRET',
    'token': 'TON_ACCESS_TOKEN',
    'secret': 'TON_ACCESS_TOKEN_SECRET',
}


def default_credentials_path() -> Path:
    """~/.config/ton/credentials.json unless TON_CREDENTIALS points elsewhere."""
    env_path = os.environ.get('TON_CREDENTIALS')
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / '.config' / 'ton' / 'credentials.json'


class JSONCredentialStore(CredentialStore):
    """
    Credential storage backed by one JSON file.
    
    Example:
        >>> store = JSONCredentialStore("~/.config/ton/credentials.json")
        >>> creds = store.load()
    """
    
    def __init__(self, path: Optional[Union[str, Path]] = None, use_env: bool = True):
        """
        Initialize JSON store.
        
        Args:
            path: Credential file path (default_credentials_path() if None)
            use_env: Let TON_* environment variables override file values
        """
        self._path = Path(path).expanduser() if path else default_credentials_path()
        self._use_env = use_env
        self._logger = get_logger('tonupload.credentials')
    
    @property
    def path(self) -> Path:
        return self._path
    
    def _read_file(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Cannot read credentials from {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Credentials file {self._path} must hold a JSON object")
        return data
    
    def _read_env(self) -> dict:
        if not self._use_env:
            return {}
        return {
            name: os.environ[var]
            for name, var in ENV_FIELDS.items()
            if os.environ.get(var)
        }
    
    def load(self) -> Optional[Credentials]:
        """
        Load credentials from file and environment.
        
        Returns:
            Credentials, or None when neither source has anything
            
        Raises:
            ConfigError: If the file is unreadable or incomplete
        """
        data = self._read_file()
        data.update(self._read_env())
        if not data:
            self._logger.debug(f"No credentials at {self._path} or in environment")
            return None
        return Credentials.from_dict(data)
    
    def save(self, credentials: Credentials) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(credentials.to_dict(), indent=2), encoding='utf-8')
        os.chmod(self._path, 0o600)
    
    def delete(self) -> None:
        if self._path.exists():
            self._path.unlink()
    
    def exists(self) -> bool:
        return self._path.exists()
