"""
Provider credentials.

Callers treat credentials as opaque; each adapter checks for the shape it
needs. Secrets are ``SecretStr`` so they are masked in repr, logs and dumps.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr


class ProviderCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)


class PasswordCredentials(ProviderCredentials):
    username: str
    password: SecretStr


class OAuthTokenCredentials(ProviderCredentials):
    access_token: SecretStr
    refresh_token: Optional[SecretStr] = None
    expires_at: Optional[datetime] = None
    scope: Optional[str] = None


class ApiKeyCredentials(ProviderCredentials):
    api_key: SecretStr
