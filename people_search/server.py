# server.py

import enum
import logging
import signal
import threading
from dataclasses import dataclass

from werkzeug.serving import ThreadedWSGIServer, WSGIRequestHandler

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Timeouts:
    read: float = 5.0
    write: float = 10.0
    idle: float = 15.0


# -------------------
# Connection handling
# -------------------
class TimeoutRequestHandler(WSGIRequestHandler):
    """
    Applies a socket timeout per connection phase: `read` before the first
    request, `idle` between keep-alive requests and `write` while the
    application runs and the response goes out.
    """

    def setup(self):
        super().setup()
        self.requests_served = 0

    def handle_one_request(self):
        timeouts = self.server.timeouts
        self.connection.settimeout(timeouts.idle if self.requests_served else timeouts.read)
        super().handle_one_request()
        self.requests_served += 1
        if not self.server.keep_alive:
            self.close_connection = True

    def run_wsgi(self):
        self.connection.settimeout(self.server.timeouts.write)
        if not self.server.keep_alive:
            self.close_connection = True
        super().run_wsgi()


class GracefulServer(ThreadedWSGIServer):
    """Threaded WSGI server that tracks open connections so it can drain them."""

    def __init__(self, host, port, app, timeouts=None):
        self.timeouts = timeouts or Timeouts()
        self.keep_alive = True
        self._active = 0
        self._idle = threading.Condition()
        super().__init__(host, port, app, handler=TimeoutRequestHandler)

    @property
    def active_connections(self) -> int:
        with self._idle:
            return self._active

    def process_request(self, request, client_address):
        with self._idle:
            self._active += 1
        try:
            super().process_request(request, client_address)
        except Exception:
            self._release()
            raise

    def process_request_thread(self, request, client_address):
        try:
            super().process_request_thread(request, client_address)
        finally:
            self._release()

    def _release(self):
        with self._idle:
            self._active -= 1
            self._idle.notify_all()

    def drain(self, timeout=None) -> bool:
        """Wait for open connections to finish; False if `timeout` ran out first."""
        with self._idle:
            return self._idle.wait_for(lambda: self._active == 0, timeout)


def make_server(config, app) -> GracefulServer:
    timeouts = Timeouts(
        read=config.read_timeout,
        write=config.write_timeout,
        idle=config.idle_timeout,
    )
    return GracefulServer(config.host, config.port, app, timeouts)


# -------------------
# Shutdown
# -------------------
class State(enum.Enum):
    RUNNING = 'running'
    SHUTTING_DOWN = 'shutting_down'
    STOPPED = 'stopped'


class ShutdownCoordinator:

    def __init__(self, server, grace_period: float = 30.0):
        self.server = server
        self.grace_period = grace_period
        self.state = State.RUNNING
        self._quit = threading.Event()

    def install(self, signals=(signal.SIGINT, signal.SIGTERM)):
        for sig in signals:
            signal.signal(sig, self._on_signal)

    def _on_signal(self, signum, frame):
        # runs on the main thread; the actual shutdown happens in wait()
        log.info('Received %s', signal.Signals(signum).name)
        self._quit.set()

    def request(self):
        self._quit.set()

    def wait(self) -> bool:
        self._quit.wait()
        return self.shutdown()

    def shutdown(self) -> bool:
        if self.state is not State.RUNNING:
            return True
        self.state = State.SHUTTING_DOWN
        log.info('Server is shutting down...')

        self.server.keep_alive = False
        self.server.shutdown()
        self.server.server_close()

        drained = self.server.drain(self.grace_period)
        if not drained:
            log.error('Could not gracefully shutdown the server: %d connection(s) '
                      'still open after %.0fs', self.server.active_connections,
                      self.grace_period)

        self.state = State.STOPPED
        return drained
