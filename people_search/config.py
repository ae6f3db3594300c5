# config.py

import argparse
import os
from dataclasses import dataclass, field

# -------------------
# Defaults
# -------------------
DEFAULT_LISTEN_ADDR = ':5000'
DEFAULT_ES_ADDRESSES = ('http://es01:9200', 'http://es02:9200')

READ_TIMEOUT = 5.0
WRITE_TIMEOUT = 10.0
IDLE_TIMEOUT = 15.0
SHUTDOWN_TIMEOUT = 30.0


def split_addresses(value: str) -> tuple:
    """Split a comma-separated address list, dropping blanks."""
    return tuple(a.strip() for a in value.split(',') if a.strip())


@dataclass(frozen=True)
class Config:
    listen_addr: str = DEFAULT_LISTEN_ADDR
    es_addresses: tuple = field(default=DEFAULT_ES_ADDRESSES)
    strict_bootstrap: bool = False
    read_timeout: float = READ_TIMEOUT
    write_timeout: float = WRITE_TIMEOUT
    idle_timeout: float = IDLE_TIMEOUT
    shutdown_timeout: float = SHUTDOWN_TIMEOUT
    log_level: str = 'INFO'

    @property
    def host(self) -> str:
        host = self.listen_addr.rpartition(':')[0]
        return host.strip('[]') or '0.0.0.0'

    @property
    def port(self) -> int:
        return int(self.listen_addr.rpartition(':')[2])


# -------------------
# CLI
# -------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='people-search',
        description='HTTP front end for the people search index'
    )
    parser.add_argument(
        '--listen-addr', '-listen-addr',
        default=os.environ.get('LISTEN_ADDR', DEFAULT_LISTEN_ADDR),
        help='server listen address (default=%(default)s)'
    )
    parser.add_argument(
        '--es-addresses', '-es-addresses',
        default=os.environ.get('ES_ADDRESSES', ','.join(DEFAULT_ES_ADDRESSES)),
        help='comma-separated elasticsearch addresses (default=%(default)s)'
    )
    parser.add_argument(
        '--strict-bootstrap', action='store_true',
        help='fail startup if the index to reset does not exist yet'
    )
    parser.add_argument(
        '--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
    )
    return parser


def parse_args(argv=None) -> Config:
    args = build_parser().parse_args(argv)
    return Config(
        listen_addr=args.listen_addr,
        es_addresses=split_addresses(args.es_addresses),
        strict_bootstrap=args.strict_bootstrap,
        log_level=args.log_level,
    )
