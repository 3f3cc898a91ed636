from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Final

import httpx

from .configuration import LoaderConfiguration
from .errors import LoadError, ParseError
from .value import JsonValue

HTTP_LOCATOR_PREFIXES: Final[tuple[str, ...]] = ('http://', 'https://')

_LOGGER: Final[logging.Logger] = logging.getLogger(__name__)


def is_http_locator(locator: str | Path, /) -> bool:
    return isinstance(locator, str) and locator.startswith(
        HTTP_LOCATOR_PREFIXES
    )


def parse_json(data: bytes | bytearray | str, /) -> JsonValue:
    try:
        if isinstance(data, str):
            data = data.encode('utf-8')
        result: JsonValue = json.loads(data)
    except ValueError as error:
        raise ParseError(f'Failed JSON parsing: {error}.') from error
    return result


def read_source(
    locator: str | Path,
    /,
    *,
    client: httpx.Client | None = None,
    configuration: LoaderConfiguration | None = None,
    logger: logging.Logger = _LOGGER,
) -> bytes:
    """Reads raw bytes from HTTP(S) URL or filesystem path.

    A client passed by the caller is used as is and stays open,
    otherwise a new one is created from the configuration
    and closed before returning.
    """
    if not is_http_locator(locator):
        logger.debug('Reading file %s.', locator)
        try:
            result = Path(locator).read_bytes()
        except OSError as error:
            raise LoadError(f'Failed reading file {locator!r}.') from error
        logger.debug(
            'Successfully read %s bytes from %s.', len(result), locator
        )
        return result
    assert isinstance(locator, str), locator
    with _open_client(
        client, configuration or LoaderConfiguration()
    ) as http_client:
        logger.debug('Fetching %s.', locator)
        try:
            with http_client.stream('GET', locator) as response:
                if not response.is_success:
                    raise LoadError(
                        f'Failed fetching {locator!r}: '
                        f'got status code {response.status_code}.'
                    )
                result = response.read()
        except (httpx.HTTPError, httpx.InvalidURL) as error:
            raise LoadError(f'Failed fetching {locator!r}.') from error
    logger.debug(
        'Successfully fetched %s bytes from %s.', len(result), locator
    )
    return result


@contextlib.contextmanager
def _open_client(
    client: httpx.Client | None, configuration: LoaderConfiguration, /
) -> Iterator[httpx.Client]:
    if client is not None:
        yield client
        return
    with httpx.Client(
        follow_redirects=configuration.follow_redirects,
        headers=dict(configuration.headers),
        timeout=configuration.timeout_s,
    ) as result:
        yield result
