import socket

from tictactoe import MARKS, RESULT_MESSAGES, MalformedMove

HOST = '127.0.0.1'
PORT = 8080
BUFFER_SIZE = 1024
BACKLOG = 3  # pending connections allowed, only the first is accepted

BOARD_SIZE = 9
REJECT_MESSAGE = "Invalid move"
TERMINAL_MESSAGES = tuple(RESULT_MESSAGES.values())

_BOARD_CHARS = set("123456789") | set(MARKS)


class ProtocolError(Exception):
    pass


class ConnectionClosed(ProtocolError):
    pass


def encode_board(board):
    return "".join(board).encode('ascii')


def decode_board(data):
    """Turn a 9-byte snapshot into a list of cell strings."""
    if len(data) < BOARD_SIZE:
        raise ProtocolError(f"Board snapshot too short: {data!r}")
    board = list(data[:BOARD_SIZE].decode('ascii', errors='replace'))
    if not all(cell in _BOARD_CHARS for cell in board):
        raise ProtocolError(f"Invalid board snapshot: {data!r}")
    return board


def encode_move(position):
    return str(position).encode('ascii')


def parse_move(data):
    # Leading digits only, anything after them is ignored
    text = data.decode('ascii', errors='replace').strip().rstrip('\x00')
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    if not digits:
        raise MalformedMove(data)
    return int(digits)


def _text(data):
    return data.rstrip(b'\x00').decode('ascii', errors='replace')


def is_terminal(data):
    return _text(data) in TERMINAL_MESSAGES


def is_reject(data):
    return _text(data) == REJECT_MESSAGE


def terminal_text(data):
    return _text(data)


def send_message(sock, message):
    if isinstance(message, str):
        message = message.encode('ascii')
    sock.sendall(message)


def recv_message(sock):
    data = sock.recv(BUFFER_SIZE)
    if not data:
        raise ConnectionClosed("Connection closed by peer")
    return data


def parse_address(args, host=HOST, port=PORT):
    """Read optional ``[host] [port]`` arguments."""
    if len(args) > 2:
        raise ProtocolError("Usage: [host] [port]")
    if args:
        host = args[0]
    if len(args) > 1:
        try:
            port = int(args[1])
        except ValueError:
            raise ProtocolError(f"Invalid port: {args[1]}")
    if not 0 <= port <= 65535:
        raise ProtocolError(f"Port must be between 0 and 65535: {port}")
    try:
        socket.inet_aton(socket.gethostbyname(host))
    except (OSError, UnicodeError):
        raise ProtocolError(f"Invalid address: {host}")
    return host, port
