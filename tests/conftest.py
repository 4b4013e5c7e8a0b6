import socket
import threading

import pytest


class Runner(threading.Thread):
    """Runs a blocking call in the background and keeps its outcome."""

    def __init__(self, target):
        super().__init__(daemon=True)
        self.call = target
        self.result = None
        self.error = None

    def run(self):
        try:
            self.result = self.call()
        except BaseException as e:
            self.error = e

    def outcome(self, timeout=5):
        self.join(timeout)
        assert not self.is_alive(), "background call did not finish"
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def scripted():
    """Build a read_input replacement that answers with the given lines."""

    def factory(*answers):
        remaining = iter(answers)
        prompts = []

        def read_input(prompt=""):
            prompts.append(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError(prompt)

        read_input.prompts = prompts
        return read_input

    return factory


@pytest.fixture
def run_in_thread():
    def start(target):
        runner = Runner(target)
        runner.start()
        return runner

    return start


@pytest.fixture
def listener():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    sock.listen(1)
    sock.settimeout(5)
    yield sock
    sock.close()


@pytest.fixture
def socket_pair():
    left, right = socket.socketpair()
    right.settimeout(5)
    yield left, right
    left.close()
    right.close()
