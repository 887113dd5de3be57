"""Shortening service orchestrating code generation and the key-value store

Responsibilities:
    - Validate shorten requests (target URL, expiry);
    - Resolve the short code (custom or generated);
    - Create, resolve, describe and remove short links through a KeyValueBaseDAO.

Each operation is a single linear pass over the store. Resolve and remove
check `exists()` first and then read or delete in a second store call; the
pair is not atomic, so a concurrent delete or expiry in between surfaces as
NotFoundError / StoreReadError rather than stale data.

Classes:
    ShortLinkService:
        Create/resolve/remove short links on top of an explicitly provided DAO.

Example:
    >>> from localshortener.dao.redis import KeyValueRedisDAO
    >>> from localshortener.services import ShortLinkService

    >>> service = ShortLinkService(KeyValueRedisDAO(redis_path='data/links.rdb'), code_length=6)
    >>> code = service.create('https://example.com', expiry='10')
    >>> service.resolve(code)
    'https://example.com'
    >>> service.remove(code)
"""

import re
import logging
from datetime import datetime, timedelta, UTC

from localshortener.models import ShortLinkModel
from localshortener.dao.base import KeyValueBaseDAO
from localshortener.exceptions import ValidationError, NotFoundError, CodeExhaustedError
from localshortener.constants import TTL, Defaults
from localshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r'[+-]?[0-9]+')


def parse_expiry(expiry: str | int | None) -> int:
    """Parse a requested expiry into a number of minutes

    Args:
        expiry (str | int | None):
            None or '' means the link never expires. Otherwise a positive
            integer, or a string holding one (an optional sign is accepted).

    Returns:
        int: Expiry in minutes, 0 for no expiry.

    Raises:
        ValidationError:
            If the expiry is not a number, is out of range or smaller than 1.

    Example:
        >>> parse_expiry('15')
        15
        >>> parse_expiry(None)
        0
        >>> parse_expiry('abc')
        ValidationError: expiry must be a number
    """
    if expiry is None or expiry == '':
        return 0

    if isinstance(expiry, bool):
        raise ValidationError('expiry must be a number')
    if isinstance(expiry, int):
        minutes = expiry
    elif isinstance(expiry, str) and _INTEGER_RE.fullmatch(expiry):
        try:
            minutes = int(expiry)
        except ValueError as e:
            # Beyond the interpreter's integer string conversion limit
            raise ValidationError('expiry must be a number') from e
    else:
        raise ValidationError('expiry must be a number')

    if minutes > TTL.MAX_MINUTES:
        raise ValidationError('expiry must be a number')

    if minutes < 1:
        raise ValidationError('expiry must be greater than 0')
    return minutes


class ShortLinkService:
    """Create, resolve and remove short links

    Attributes:
        dao (KeyValueBaseDAO):
            Store adapter shared by every request. It's owned by the caller,
            which is also responsible for closing it.
        code_length (int):
            Length of generated short codes.
        collision_retries (int):
            0 keeps generation collision-blind (a generated code that's
            already taken silently overwrites the old link). n > 0 checks each
            generated code against the store and tries up to n + 1 candidates.
    """

    def __init__(
        self,
        dao: KeyValueBaseDAO,
        code_length: int = Defaults.SHORT_CODE_LENGTH,
        collision_retries: int = Defaults.COLLISION_RETRIES,
    ):
        if code_length < 1:
            raise ValueError(f'Code length must be a positive integer (given value: {code_length}).')
        if collision_retries < 0:
            raise ValueError(f'Collision retries must be a non-negative integer (given value: {collision_retries}).')

        self.dao = dao
        self.code_length = code_length
        self.collision_retries = collision_retries

    def create(self, url: str | None, custom_code: str | None = None, expiry: str | int | None = None) -> str:
        """Create (or overwrite) a short link

        This method follows this procedure:
        - Step 1: Reject an empty target URL
        - Step 2: Validate the optional expiry
        - Step 3: Use the custom code or generate one
        - Step 4: Store the code -> URL mapping (single store transaction)

        A custom code overwrites any existing link stored under it. Creation
        is also the update path.

        Args:
            url (str | None):
                Destination URL. Opaque to the service beyond being non-empty.
            custom_code (str | None):
                Desired short code. Generated when empty.
            expiry (str | int | None):
                Optional expiry in minutes (see parse_expiry()).

        Returns:
            str: The short code the link is stored under.

        Raises:
            ValidationError:
                If the URL is empty or the expiry is invalid.
            RandomSourceError:
                If code generation can't read the secure random source.
            CodeExhaustedError:
                If collision retries are enabled and every candidate is taken.
            StoreWriteError / StoreReadError:
                If the store fails.
        """
        # 1- Reject empty target URL
        if not url:
            raise ValidationError('url required')

        # 2- Validate expiry
        expiry_minutes = parse_expiry(expiry)

        # 3- Resolve short code
        code = custom_code or self._generate_code()

        # 4- Store mapping
        self.dao.set(code, url, expiry_minutes)
        logger.debug(
            'Stored short link.',
            extra={'code': code, 'custom': bool(custom_code), 'expiryMinutes': expiry_minutes},
        )
        return code

    def resolve(self, code: str) -> str:
        """Return the target URL of a live short link

        Raises:
            NotFoundError:
                If no live link exists for the code.
            StoreReadError:
                If the store fails, including when the link vanishes between
                the existence check and the read.
        """
        if not self.dao.exists(code):
            raise NotFoundError(f"Short link with code '{code}' not found.")
        return self.dao.get(code)

    def describe(self, code: str) -> ShortLinkModel:
        """Return a live short link along with its expiry

        Raises:
            NotFoundError:
                If no live link exists for the code.
            StoreReadError:
                If the store fails.
        """
        target = self.resolve(code)
        ttl = self.dao.ttl(code)
        expires_at = None if ttl is None else datetime.now(UTC) + timedelta(seconds=ttl)
        return ShortLinkModel(code=code, target=target, expires_at=expires_at)

    def remove(self, code: str) -> None:
        """Delete a short link

        Raises:
            NotFoundError:
                If no live link exists for the code.
            StoreReadError / StoreWriteError:
                If the store fails.
        """
        if not self.dao.exists(code):
            raise NotFoundError(f"Short link with code '{code}' not found.")
        self.dao.delete(code)

    def _generate_code(self) -> str:
        if self.collision_retries == 0:
            return generate_shortcode(self.code_length)

        # NOTE: best-effort only. Another request may claim the same code
        #       between the existence check and the write.
        attempts = self.collision_retries + 1
        for attempt in range(1, attempts + 1):
            code = generate_shortcode(self.code_length)
            if not self.dao.exists(code):
                return code
            logger.warning('Generated short code is already taken.', extra={'code': code, 'attempt': attempt})

        raise CodeExhaustedError(f'No free short code of length {self.code_length} found after {attempts} attempts.')
