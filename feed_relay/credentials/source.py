import getpass
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, TextIO

from feed_relay.errors import CredentialError


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)

    @classmethod
    def trimmed(cls, username: str, password: str) -> "Credentials":
        return cls(username=username.strip(), password=password.strip())


class CredentialSource(Protocol):
    """Anything that can hand over a username/password pair at startup."""

    def read_credentials(self) -> Credentials: ...


class StaticCredentialSource:
    """Returns fixed credentials; used by tests and non-interactive runs."""

    def __init__(self, username: str, password: str):
        self._credentials = Credentials.trimmed(username, password)

    def read_credentials(self) -> Credentials:
        return self._credentials


class TerminalCredentialSource:
    """
    Prompts on the controlling terminal.

    The username is read as one line from ``stdin``; the password is read
    with echo disabled. Both are stripped of surrounding whitespace.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        read_password: Callable[[str], str] = getpass.getpass,
    ):
        self._stdin = stdin
        self._stdout = stdout
        self._read_password = read_password

    def read_credentials(self) -> Credentials:
        stdin = self._stdin or sys.stdin
        stdout = self._stdout or sys.stdout

        stdout.write("Enter Username: ")
        stdout.flush()
        try:
            line = stdin.readline()
        except OSError as e:
            raise CredentialError("unable to read username", e) from e
        if not line:
            raise CredentialError("unable to read username: end of input")

        try:
            password = self._read_password("Enter Password: ")
        except (EOFError, OSError) as e:
            raise CredentialError("unable to read password", e) from e

        return Credentials.trimmed(line, password)
