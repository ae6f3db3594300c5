# search_api.py

import logging

from elasticsearch import ApiError, TransportError
from flask import Flask, jsonify, request

from .config import Config
from .query import build_query, query_body
from .seed import INDEX

log = logging.getLogger(__name__)

UPSTREAM_ERRORS = (ApiError, TransportError)


def _upstream_error(exc):
    log.warning('Elasticsearch call failed: %s', exc)
    return str(exc), 500, {'Content-Type': 'text/plain; charset=utf-8'}


def create_app(es, config=None) -> Flask:
    config = config or Config()

    app = Flask(__name__)
    # pass upstream documents through in the order elasticsearch sent them
    app.json.sort_keys = False

    @app.before_request
    def log_request():
        log.info('%s %s %s %s', request.method, request.path,
                 request.remote_addr, request.user_agent.string)

    @app.route('/')
    def info():
        try:
            res = es.info()
        except UPSTREAM_ERRORS as exc:
            return _upstream_error(exc)
        return jsonify(res.body), 200

    @app.route('/search')
    def search():
        q = request.args.get('q', '')
        if log.isEnabledFor(logging.DEBUG):
            log.debug('search body for %r:\n%s', q, build_query(q))
        try:
            res = es.options(request_timeout=config.write_timeout).search(
                index=INDEX,
                track_total_hits=True,
                **query_body(q)
            )
        except UPSTREAM_ERRORS as exc:
            return _upstream_error(exc)
        return jsonify(res.body)

    return app
