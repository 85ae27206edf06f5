"""
Credential data models.
"""
from dataclasses import dataclass, asdict
from typing import ClassVar, Optional, Tuple

from ..exceptions import ConfigError


@dataclass
class Credentials:
    """
    OAuth credentials kept in the local profile store.
    
    Attributes:
        consumer_key: Application consumer key
        consumer_secret: Application consumer secret
        token: User access token (user auth only)
        secret: User access token secret (user auth only)
    """
    consumer_key: str
    consumer_secret: str
    token: Optional[str] = None
    secret: Optional[str] = None
    
    USER_FIELDS: ClassVar[Tuple[str, ...]] = ('consumer_key', 'consumer_secret', 'token', 'secret')
    APP_FIELDS: ClassVar[Tuple[str, ...]] = ('consumer_key', 'consumer_secret')
    
    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}
    
    @classmethod
    def from_dict(cls, data: dict) -> 'Credentials':
        """
        Create from dictionary.
        
        Raises:
            ConfigError: If the consumer key or secret is missing
        """
        missing = [name for name in cls.APP_FIELDS if not data.get(name)]
        if missing:
            raise ConfigError(f"Credentials missing: {', '.join(missing)}")
        return cls(
            consumer_key=data['consumer_key'],
            consumer_secret=data['consumer_secret'],
            token=data.get('token') or None,
            secret=data.get('secret') or None,
        )
    
    def require(self, app_auth: bool) -> 'Credentials':
        """
        Check the fields the selected auth mode needs are present.
        
        Raises:
            ConfigError: Naming the missing fields
        """
        needed = self.APP_FIELDS if app_auth else self.USER_FIELDS
        missing = [name for name in needed if not getattr(self, name)]
        if missing:
            mode = 'app auth' if app_auth else 'user auth'
            raise ConfigError(f"Credentials for {mode} missing: {', '.join(missing)}")
        return self
