from .source import (
    CredentialSource,
    Credentials,
    StaticCredentialSource,
    TerminalCredentialSource,
)

__all__ = [
    "CredentialSource",
    "Credentials",
    "StaticCredentialSource",
    "TerminalCredentialSource",
]
