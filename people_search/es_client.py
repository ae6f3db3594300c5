# es_client.py

import logging

from elasticsearch import Elasticsearch

log = logging.getLogger(__name__)


def build_client(addresses, request_timeout=None) -> Elasticsearch:
    """
    Create the Elasticsearch client over an ordered list of node URLs.
    Node selection and failover are left to the client's own node pool.

    `request_timeout` overrides the client library default when given.

    Raises ValueError when the list is empty or an address is malformed.
    """
    addresses = list(addresses)
    if not addresses:
        raise ValueError('at least one elasticsearch address is required')

    kwargs = {}
    if request_timeout is not None:
        kwargs['request_timeout'] = request_timeout

    try:
        es = Elasticsearch(addresses, **kwargs)
    except ValueError as exc:
        log.error('Could not create elasticsearch client for %s: %s', addresses, exc)
        raise

    log.info('Elasticsearch client configured for %s', ', '.join(addresses))
    return es
