# authwrap.py — HTTP Basic Auth gate composed in front of protected Flask views.
import base64, binascii, hmac
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional, TypeVar, Union
from flask import current_app, request
from werkzeug.exceptions import Unauthorized

from config import Credentials

F = TypeVar("F", bound=Callable[..., object])

EXTENSION_KEY = "basic_auth_gate"
NOT_AUTHENTICATED = "You are not authenticated!"


# -------------------- Errors --------------------
class AuthenticationError(Unauthorized):
    """401 carrying the Basic challenge for the response."""

    def __init__(self, realm: Optional[str] = None):
        super().__init__(description=NOT_AUTHENTICATED)
        self.realm = realm

    @property
    def challenge(self) -> str:
        return f'Basic realm="{self.realm}"' if self.realm else "Basic"

    def get_headers(self, environ=None, scope=None):
        headers = super().get_headers(environ, scope)
        headers.append(("WWW-Authenticate", self.challenge))
        return headers


class MissingCredentials(AuthenticationError):
    pass


class InvalidCredentials(AuthenticationError):
    pass


# -------------------- Chain outcomes --------------------
@dataclass(frozen=True)
class Continue:
    credentials: Credentials


@dataclass(frozen=True)
class Halt:
    error: AuthenticationError


Outcome = Union[Continue, Halt]


# -------------------- Header parsing --------------------
def _b64decode(token: str) -> Optional[bytes]:
    token = "".join(token.split())
    try:
        return base64.b64decode(token + "=" * (-len(token) % 4))
    except (binascii.Error, ValueError):
        return None


def parse_authorization(header: str) -> Optional[Credentials]:
    """Decode `<scheme> <base64(user:pass)>` into presented credentials.

    The scheme is not checked. A header without a space yields an empty token,
    and a payload without ':' yields a password of None. Returns None only when
    the token is not base64 at all.
    """
    token = header.split(" ", 1)[1] if " " in header else ""
    raw = _b64decode(token)
    if raw is None:
        return None
    user, sep, pw = raw.decode("utf-8", errors="replace").partition(":")
    return Credentials(user, pw if sep else None)


def _same(presented: Optional[str], expected: Optional[str]) -> bool:
    if presented is None or expected is None:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


# -------------------- Gate --------------------
class BasicAuthGate:
    def __init__(self, expected: Credentials, realm: Optional[str] = None):
        self.expected = expected
        self.realm = realm

    def evaluate(self, header: Optional[str]) -> Outcome:
        if not header:
            return Halt(MissingCredentials(self.realm))
        presented = parse_authorization(header)
        if presented is None or not self.expected.configured:
            return Halt(InvalidCredentials(self.realm))
        user_ok = _same(presented.username, self.expected.username)
        pass_ok = _same(presented.password, self.expected.password)
        if user_ok and pass_ok:
            return Continue(presented)
        return Halt(InvalidCredentials(self.realm))


def requires_auth(view: F) -> F:
    """Run the app's BasicAuthGate before `view`; raise on Halt."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        gate: BasicAuthGate = current_app.extensions[EXTENSION_KEY]
        outcome = gate.evaluate(request.headers.get("Authorization"))
        if isinstance(outcome, Halt):
            raise outcome.error
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
