import logging
from unittest.mock import MagicMock, patch

import pytest
from elasticsearch import ConnectionError as ESConnectionError

from people_search import main as entry
from people_search.server import State


@pytest.fixture
def es():
    return MagicMock()


def test_invalid_address_is_fatal():
    with pytest.raises(ValueError):
        entry.main(['-es-addresses', 'es01'])


def test_bootstrap_failure_is_fatal(es):
    es.indices.delete.side_effect = ESConnectionError('Connection refused')
    with patch.object(entry, 'build_client', return_value=es), \
            patch.object(entry, 'make_server') as make_server:
        with pytest.raises(ESConnectionError):
            entry.main(['-es-addresses', 'http://es01:9200'])
    make_server.assert_not_called()


def test_listen_failure_returns_1(es):
    with patch.object(entry, 'build_client', return_value=es), \
            patch.object(entry, 'make_server', side_effect=OSError('Address already in use')):
        assert entry.main(['-listen-addr', '127.0.0.1:1']) == 1


@pytest.mark.parametrize('drained,status', [(True, 0), (False, 1)])
def test_exit_status_follows_drain(es, drained, status):
    server = MagicMock()
    coordinator = MagicMock(state=State.STOPPED)
    coordinator.wait.return_value = drained

    with patch.object(entry, 'build_client', return_value=es), \
            patch.object(entry, 'make_server', return_value=server), \
            patch.object(entry, 'ShutdownCoordinator', return_value=coordinator):
        assert entry.main(['-listen-addr', '127.0.0.1:0']) == status

    coordinator.install.assert_called_once_with()
    server.serve_forever.assert_called_once_with()
    es.indices.create.assert_called_once_with(index='people')


def test_client_uses_library_default_timeout(es):
    with patch.object(entry, 'build_client', return_value=es) as build_client, \
            patch.object(entry, 'make_server', side_effect=OSError('Address already in use')):
        entry.main(['-es-addresses', 'http://es01:9200'])
    build_client.assert_called_once_with(('http://es01:9200',))


def test_werkzeug_access_log_is_quieted():
    werkzeug_log = logging.getLogger('werkzeug')
    level = werkzeug_log.level
    try:
        entry.configure_logging('INFO')
        assert werkzeug_log.level == logging.WARNING
    finally:
        werkzeug_log.setLevel(level)
