"""Short ID generation

This module draws random short IDs and claims them in the data store,
retrying on collision.

Functions:
    generate_id(length, alphabet=ALPHABET) -> str:
        Draw a random short ID.

Classes:
    IdGenerator:
        Generate a free short ID and persist its URL mapping.

Example:
    >>> from shorty.core.id_generator import generate_id
    >>> generate_id(10)
    'Tq4ZbM0xWe'
"""

import random
import logging

from beartype import beartype

from shorty.constants import ALPHABET, Defaults
from shorty.models import ShortLink
from shorty.dao.base import StoreBaseDAO
from shorty.exceptions import IdGenerationExhaustedError


logger = logging.getLogger(__name__)

# Short IDs only need to be uniformly distributed to avoid collisions,
# they are not secrets.
_random = random.Random()  # noqa: S311


@beartype
def generate_id(length: int, alphabet: str = ALPHABET) -> str:
    """Draw `length` characters independently and uniformly from `alphabet`

    Args:
        length (int):
            Number of characters. Must be positive.

        alphabet (str):
            Symbols to draw from. Defaults to base62 [a-zA-Z0-9].

    Returns:
        str: A random short ID.

    Raises:
        ValueError: If `length` isn't positive or `alphabet` is empty.
    """
    if length < 1:
        raise ValueError(f'Short ID length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Short ID alphabet must be a non-empty string.')

    return ''.join(_random.choices(alphabet, k=length))


class IdGenerator:
    """Generate unique short IDs and persist their URL mapping

    The uniqueness guarantee comes from the store's atomic set-if-absent: two
    concurrent writers drawing the same ID can't both claim it. The loser of
    such a race (or any caller drawing an ID already in use) simply draws again.
    """

    def __init__(self, store: StoreBaseDAO, alphabet: str = ALPHABET):
        self.store = store
        self.alphabet = alphabet

    @beartype
    def generate_and_store(
        self,
        url: str,
        id_length: int = Defaults.ID_LENGTH,
        max_attempts: int = Defaults.ID_GENERATION_MAX_ATTEMPTS,
    ) -> ShortLink:
        """Claim a free short ID for `url`

        Args:
            url (str):
                Normalized destination URL.

            id_length (int):
                Length of the generated short ID.

            max_attempts (int):
                Short IDs drawn before giving up. Each attempt is independently
                atomic, so an interrupted sequence leaves no orphaned state.

        Returns:
            ShortLink: The persisted short link.

        Raises:
            IdGenerationExhaustedError:
                If every drawn short ID was already taken.

            StorageUnavailableError:
                If the mapping can't be written.
        """
        for attempt in range(1, max_attempts + 1):
            short_id = generate_id(id_length, self.alphabet)
            if self.store.set_if_absent(self.store.keys.link_key(short_id), url):
                return ShortLink(id=short_id, url=url)

            logger.warning(
                'Short ID collision, drawing a new one.',
                extra={'shortId': short_id, 'attempt': attempt, 'maxAttempts': max_attempts},
            )

        raise IdGenerationExhaustedError(f'Failed to generate a unique short ID after {max_attempts} attempts.')
