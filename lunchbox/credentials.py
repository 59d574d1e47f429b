import os
from typing import Mapping, Protocol

from lunchbox.errors import CredentialNotFound, CredentialStoreError, DuplicateCredential


YOUTUBE_ACCOUNT = "youtubeAPIKey"

ENV_ACCOUNTS = {
    "apiKey_Gemini": "GEMINI_API_KEY",
    "apiKey_OpenAI": "OPENAI_API_KEY",
    "apiKey_Claude": "ANTHROPIC_API_KEY",
    YOUTUBE_ACCOUNT: "YOUTUBE_API_KEY",
}


class CredentialStore(Protocol):
    def save(self, secret: str, account: str, *, overwrite: bool = True) -> None:
        ...

    def load(self, account: str) -> str:
        """Return the secret or raise `CredentialNotFound`."""
        ...

    def delete(self, account: str) -> None:
        ...


class MemoryCredentialStore:
    """Secrets held for the lifetime of the process, keyed by account name."""

    @classmethod
    def from_env(
        cls,
        accounts: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "MemoryCredentialStore":
        accounts = ENV_ACCOUNTS if accounts is None else accounts
        environ = os.environ if environ is None else environ
        secrets = {
            account: environ[var]
            for account, var in accounts.items()
            if environ.get(var, "").strip()
        }
        return cls(secrets)

    def __init__(self, secrets: Mapping[str, str] | None = None) -> None:
        self._secrets: dict[str, str] = {} if secrets is None else dict(secrets)

    def save(self, secret: str, account: str, *, overwrite: bool = True) -> None:
        if not secret.strip():
            raise CredentialStoreError("Secret cannot be empty.")
        if not overwrite and account in self._secrets:
            raise DuplicateCredential(account)
        self._secrets[account] = secret

    def load(self, account: str) -> str:
        try:
            return self._secrets[account]
        except KeyError:
            raise CredentialNotFound(account) from None

    def delete(self, account: str) -> None:
        self._secrets.pop(account, None)

    def __contains__(self, account: object) -> bool:
        return account in self._secrets
