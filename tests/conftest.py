from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch import NotFoundError

from people_search.config import Config
from people_search.search_api import create_app


def api_response(body, status=200):
    """Stand-in for the client's ObjectApiResponse."""
    return SimpleNamespace(body=body, meta=SimpleNamespace(status=status))


def not_found(index='people'):
    return NotFoundError(
        message='index_not_found_exception',
        meta=SimpleNamespace(status=404),
        body={'error': {'type': 'index_not_found_exception', 'index': index}},
    )


def connection_refused():
    """Connection error shaped like the one the transport raises for a dead node."""
    cause = ConnectionRefusedError(111, 'Connection refused')
    return ESConnectionError('Connection error', errors=(cause,))


class FakeEngine:
    """Just enough of the index API to check what bootstrap leaves behind."""

    def __init__(self):
        self.indices_store = {}
        self.indices = MagicMock()
        self.indices.delete.side_effect = self._delete
        self.indices.create.side_effect = self._create
        self.indices.refresh.return_value = api_response({})

    def _delete(self, index):
        if index not in self.indices_store:
            raise not_found(index)
        del self.indices_store[index]
        return api_response({'acknowledged': True})

    def _create(self, index):
        self.indices_store[index] = {}
        return api_response({'acknowledged': True, 'index': index})

    def create(self, index, id, document):
        docs = self.indices_store[index]
        if id in docs:
            raise AssertionError(f'document {id} already exists')
        docs[id] = dict(document)
        return api_response({'_id': id, 'result': 'created'}, status=201)


@pytest.fixture
def es():
    client = MagicMock()
    # options() returns a bound copy of the client; keep it the same mock
    client.options.return_value = client
    return client


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def client(es, config):
    app = create_app(es, config)
    app.config['TESTING'] = True
    return app.test_client()
