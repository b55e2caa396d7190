import logging

from beartype import beartype

from shorty.dao.base import StoreBaseDAO
from shorty.exceptions import MissingApiKeyError, InvalidApiKeyError


logger = logging.getLogger(__name__)


class ApiKeyAuthorizer:
    """Check presented API keys against the enabled keys in the data store.

    API key records (`API_KEY_<key>` -> boolean) are written by an external
    administrative process (see `shorty-keys`). This class only reads them.
    """

    def __init__(self, store: StoreBaseDAO):
        self.store = store

    @beartype
    def authorize(self, api_key: str | None, mandatory: bool) -> None:
        """Authorize a create call

        Args:
            api_key (str | None):
                API key presented by the caller, if any.

            mandatory (bool):
                If False, authorization is disabled and every call succeeds.

        Raises:
            MissingApiKeyError:
                If authorization is mandatory and no key was presented.

            InvalidApiKeyError:
                If the key is unknown or disabled.

            StorageUnavailableError:
                If the key record can't be read.
        """
        if not mandatory:
            return

        if not api_key:
            raise MissingApiKeyError('Missing API key.')

        if not self.store.get_bool(self.store.keys.api_key_key(api_key), default=False):
            logger.info('Rejected unknown or disabled API key.', extra={'event': InvalidApiKeyError.error_code})
            raise InvalidApiKeyError('Invalid API key.')
