"""Short code generation utility

This module provides a generator of short, deterministic codes derived from
a (URL, owner) pair through a SHA-256 digest.

Classes:
    ShortCodeGenerator(length=6):
        Generate and validate fixed-length Base62 codes.

Example:
    >>> from linkshorter.utils import ShortCodeGenerator
    >>> generator = ShortCodeGenerator(length=6)
    >>> code = generator.generate('https://example.com', 'alice')
    >>> generator.is_valid_code(code)
    True
"""

import hashlib
import string

from linkshorter.types import OwnerId
from linkshorter.exceptions import InvalidInputError, InternalError
from linkshorter.constants import Defaults, DIGEST_ALGORITHM, CODE_SEPARATOR


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
BASE = len(ALPHABET)  # 26 uppercase + 26 lowercase + 10 digits


class ShortCodeGenerator:
    """Deterministic (URL, owner) -> code mapping.

    The same URL shortened twice by the same owner always yields the same
    code, so re-shortening converges onto one alias. Different pairs are not
    guaranteed distinct codes: with 6 characters over 62 symbols there are
    ~5.6e10 codes, so collisions are rare but possible.

    Attributes:
        length (int):
            Number of characters in each generated code.
    """

    def __init__(self, length: int = Defaults.CODE_LENGTH):
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f'Code length must be of type integer (given type: {type(length)}).')
        if length <= 0:
            raise InvalidInputError(f'Code length must be a positive integer (given value: {length}).')
        self.length = length

    def generate(self, url: str, owner_id: OwnerId) -> str:
        """Generate the short code for a URL and owner.

        Args:
            url (str):
                Destination URL.
            owner_id (OwnerId):
                Owner identifier; its string form is part of the digest input.

        Returns:
            str: `length` characters from the Base62 alphabet.

        Raises:
            InvalidInputError:
                If url is empty or blank, or owner_id is unset.
            InternalError:
                If the digest algorithm is unavailable.

        Example:
            >>> ShortCodeGenerator(6).generate('https://example.com', 'alice')
            'jH1OQp'
        """
        if not isinstance(url, str) or not url.strip():
            raise InvalidInputError('URL cannot be empty.')
        if owner_id is None or (isinstance(owner_id, str) and not owner_id.strip()):
            raise InvalidInputError('Owner ID cannot be empty.')

        payload = f'{url}{CODE_SEPARATOR}{owner_id}'.encode('utf-8')
        try:
            digest = hashlib.new(DIGEST_ALGORITHM, payload).digest()
        except ValueError as e:
            raise InternalError(f'Digest algorithm {DIGEST_ALGORITHM!r} is not available.') from e

        return self._encode(digest)

    def is_valid_code(self, code: str) -> bool:
        """Return True iff `code` has the configured length and only Base62 characters."""
        if not isinstance(code, str) or len(code) != self.length:
            return False
        return all(character in ALPHABET for character in code)

    def _encode(self, digest: bytes) -> str:
        # Bytes are read as signed (-128..127) and folded with abs() before mod 62:
        # 1- Leading digest bytes map to |byte| mod 62
        # 2- If the digest is shorter than the code, keep deriving characters
        #    from |byte[i mod len] + i| mod 62 for i = len, len + 1, ...
        signed = [byte - 256 if byte > 127 else byte for byte in digest]
        characters = [ALPHABET[abs(value) % BASE] for value in signed[: self.length]]
        i = len(signed)
        while len(characters) < self.length:
            characters.append(ALPHABET[abs(signed[i % len(signed)] + i) % BASE])
            i += 1
        return ''.join(characters)
