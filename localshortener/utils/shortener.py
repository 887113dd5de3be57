"""Shortcode generation utility

This module provides a helper function for generating short, unguessable,
random codes suitable for use as URL slugs.

Functions:
    generate_shortcode(length=6):
        Generate a random Base62 short code.

Example:
    >>> from localshortener.utils import generate_shortcode
    >>> generate_shortcode(6)
    'q3ZL0a'
"""

import string
import secrets

from beartype import beartype

from localshortener.exceptions import RandomSourceError


ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)  # 10 digits + 26 uppercase + 26 lowercase


@beartype
def generate_shortcode(length: int = 6) -> str:
    """Generate a random, fixed-length Base62 short code.

    Each character is sampled independently and uniformly from the Base62
    alphabet [0-9A-Za-z] using the operating system's CSPRNG (via `secrets`),
    so codes are unpredictable and carry log2(62) ~ 5.95 bits of entropy per
    character.

    Args:
        length (int, optional):
            Exact length of the resulting code. Defaults to 6.

    Returns:
        str: A random alphanumeric code of exactly `length` characters.

    Raises:
        ValueError:
            If length is smaller than 1.
        RandomSourceError:
            If the secure random source cannot be read.

    Example:
        >>> generate_shortcode(8)
        'Xk09bQzP'

    NOTE:
        - No uniqueness guarantee is made. Checking a new code against the
          data store is the caller's responsibility.
    """
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    try:
        return ''.join(secrets.choice(ALPHABET) for _ in range(length))
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError('Failed to read from the secure random source.') from e
