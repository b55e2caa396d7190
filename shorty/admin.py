#!/usr/bin/env python3
"""
Manage API key records in the shortener's data store.

This script follows this procedure to manage API keys:
- Step 1: Load the store connection settings from the environment (see shorty.utils.config)
- Step 2: Connect to the data store
- Step 3: Enable, disable or show the requested API keys

CLI usage:
    $ shorty-keys enable my-key another-key
    $ shorty-keys disable my-key
    $ shorty-keys show my-key
    $ shorty-keys enable my-key --dry-run

Behavior:
    - Writes `API_KEY_<key>` = 'true' | 'false' (no TTL), the records read by
      the API key authorizer.
    - `show` prints whether each key is enabled and its create calls counted
      in the current rate limit window.
    - Uses overwrite semantics (idempotent updates).

Raises:
    StorageUnavailableError: If the data store can't be reached.
    BadConfigurationError: If the environment holds malformed settings.
"""

import argparse
import logging
from collections.abc import Sequence

from shorty.dao.base import StoreBaseDAO
from shorty.dao.redis import StoreRedisDAO
from shorty.exceptions import ShortyError
from shorty.utils import load_config, initialize_logging


logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='shorty-keys', description='Manage shortener API keys.')
    parser.add_argument('command', choices=('enable', 'disable', 'show'), help='Operation to perform.')
    parser.add_argument('keys', nargs='+', metavar='KEY', help='API keys to operate on.')
    parser.add_argument('--dry-run', action='store_true', help='Print the planned changes without writing them.')
    return parser.parse_args(argv)


def set_keys(store: StoreBaseDAO, keys: Sequence[str], enabled: bool, dry_run: bool = False) -> None:
    """Enable or disable API keys.

    Args:
        store (StoreBaseDAO): Data store holding the API key records.
        keys (Sequence[str]): API keys to update.
        enabled (bool): New state of the keys.
        dry_run (bool): If True, only print the planned writes.
    """
    for key in keys:
        record = store.keys.api_key_key(key)
        if dry_run:
            print(f'[dry-run] would set {record} = {str(enabled).lower()}')
            continue

        store.set_bool(record, enabled)
        logger.info('Updated API key.', extra={'record': record, 'enabled': enabled})
        print(f'{"enabled" if enabled else "disabled"} {key}')


def show_keys(store: StoreBaseDAO, keys: Sequence[str]) -> None:
    """Print the state and current rate limit usage of API keys."""
    for key in keys:
        enabled = store.get_bool(store.keys.api_key_key(key), default=False)
        calls = store.get_int(store.keys.rate_key(key)) or 0
        print(f'{key}: {"enabled" if enabled else "disabled"}, {calls} call(s) in current window')


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    initialize_logging()

    try:
        store = StoreRedisDAO(**load_config().redis_kwargs())
        if args.command == 'show':
            show_keys(store, args.keys)
        else:
            set_keys(store, args.keys, enabled=args.command == 'enable', dry_run=args.dry_run)
    except ShortyError as error:
        logger.error('Failed to %s API keys: %s', args.command, error, extra={'event': error.error_code})
        return 1
    return 0


if __name__ == '__main__':  # pragma: no cover
    raise SystemExit(main())
