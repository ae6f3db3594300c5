# main.py

import logging
import sys
import threading

from .config import parse_args
from .es_client import build_client
from .search_api import create_app
from .seed import bootstrap
from .server import ShutdownCoordinator, make_server

log = logging.getLogger('people_search')


def configure_logging(level='INFO'):
    logging.basicConfig(
        level=level,
        format='http: %(asctime)s %(message)s',
        datefmt='%Y/%m/%d %H:%M:%S',
        stream=sys.stdout,
    )
    # search_api logs every request itself
    logging.getLogger('werkzeug').setLevel(logging.WARNING)


def main(argv=None) -> int:
    config = parse_args(argv)
    configure_logging(config.log_level)

    # startup failures here are fatal and propagate to the caller
    es = build_client(config.es_addresses)
    bootstrap(es, strict=config.strict_bootstrap)

    try:
        server = make_server(config, create_app(es, config))
    except (OSError, ValueError, SystemExit) as exc:
        # werkzeug prints the bind error and exits rather than raising it
        log.error('Could not listen on %s: %s', config.listen_addr, exc)
        return 1

    coordinator = ShutdownCoordinator(server, grace_period=config.shutdown_timeout)
    coordinator.install()

    serving = threading.Thread(target=server.serve_forever, name='http-server', daemon=True)
    serving.start()
    log.info('Server is ready to handle requests at %s', config.listen_addr)

    drained = coordinator.wait()
    serving.join()
    log.info('Server stopped')
    return 0 if drained else 1


def run():
    sys.exit(main())
