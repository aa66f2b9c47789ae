import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from accounts.shared.logger import Logger

logger = Logger(__name__).get_logger()

SCHEME = "scrypt"
KEY_LENGTH = 32


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class PasswordHasher:
    """
    One-way password hashing with scrypt.

    Hashes are stored as ``scrypt$n$r$p$<b64 salt>$<b64 key>`` so that records
    written with older work factors keep verifying after the config changes.
    """

    def __init__(self, n: int = 2**14, r: int = 8, p: int = 1, salt_length: int = 16):
        self.n = n
        self.r = r
        self.p = p
        self.salt_length = salt_length
        # Verified against when the account does not exist, so both failure
        # paths of a login cost one key derivation
        self.filler_hash = self.hash(os.urandom(16).hex())

    def hash(self, password: str) -> str:
        salt = os.urandom(self.salt_length)
        kdf = Scrypt(salt=salt, length=KEY_LENGTH, n=self.n, r=self.r, p=self.p)
        key = kdf.derive(password.encode("utf-8"))
        return "$".join(
            [SCHEME, str(self.n), str(self.r), str(self.p), _b64encode(salt), _b64encode(key)]
        )

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            scheme, n, r, p, salt_b64, key_b64 = password_hash.split("$")
            if scheme != SCHEME:
                raise ValueError(f"Unknown hash scheme {scheme!r}")
            salt = base64.b64decode(salt_b64)
            key = base64.b64decode(key_b64)
            kdf = Scrypt(salt=salt, length=len(key), n=int(n), r=int(r), p=int(p))
        except ValueError as e:
            logger.warning("Unreadable password hash: %s", e)
            return False

        try:
            kdf.verify(password.encode("utf-8"), key)
        except InvalidKey:
            return False
        return True
