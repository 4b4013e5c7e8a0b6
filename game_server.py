import socket
import sys

from protocol import (BACKLOG, HOST, PORT, REJECT_MESSAGE, ProtocolError,
                      encode_board, parse_address, parse_move, recv_message,
                      send_message)
from tictactoe import CLIENT_MARK, SERVER_MARK, CellOccupied, MoveError, OutOfRange, TicTacToe


class GameServer:
    """Owns the board, plays X from the console and serves one O player."""

    def __init__(self, host=HOST, port=PORT, strict=True, read_input=input):
        self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self.server_socket.bind((host, port))
            self.server_socket.listen(BACKLOG)
        except OSError:
            self.server_socket.close()
            raise
        self.port = self.server_socket.getsockname()[1]
        self.client_socket = None
        self.strict = strict
        self.read_input = read_input
        self.game = TicTacToe()

    def start(self):
        try:
            print("Waiting for opponent to connect...")
            self.client_socket, addr = self.server_socket.accept()
            print(f"Connection from {addr}")
            return self.play()
        finally:
            self.close()

    def play(self):
        print("Current Board:")
        print(self.game.render())
        while not self.game.is_finished:
            if self.game.current_player == SERVER_MARK:
                self.server_turn()
            else:
                self.client_turn()
        return self.game.result

    def server_turn(self):
        move = self.prompt_move()
        self.game.make_move(move, SERVER_MARK)
        print("Current Board:")
        print(self.game.render())
        if self.game.is_finished:
            self.finish()
        else:
            send_message(self.client_socket, encode_board(self.game.board))

    def prompt_move(self):
        while True:
            choice = self.read_input("Server (X), choose a number (1-9): ").strip()
            try:
                move = int(choice)
            except ValueError:
                print("Invalid input. Please enter a number between 1 and 9.")
                continue
            if not 1 <= move <= 9:
                print("Invalid choice. Try again.")
                continue
            if self.game.board[move - 1] in (SERVER_MARK, CLIENT_MARK):
                print("Cell already taken. Choose another.")
                continue
            return move

    def client_turn(self):
        print("Waiting for opponent's move...")
        data = recv_message(self.client_socket)
        try:
            self.game.make_move(parse_move(data), CLIENT_MARK)
        except MoveError as e:
            self.reject(e)
            return

        print("Current Board:")
        print(self.game.render())
        if self.game.is_finished:
            self.finish()

    def reject(self, error):
        if isinstance(error, CellOccupied):
            print("Cell already taken. Client, choose another.")
        elif isinstance(error, OutOfRange):
            print(f"Client sent an out-of-range move: {error.position}")
        else:
            print(f"Client sent an invalid move: {error}")
        # Without strict mode the peer is never told and the turn stays with it
        if self.strict:
            send_message(self.client_socket, REJECT_MESSAGE)

    def finish(self):
        message = self.game.result_message()
        print(message)
        send_message(self.client_socket, message)

    def close(self):
        if self.client_socket:
            self.client_socket.close()
            self.client_socket = None
        self.server_socket.close()


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    try:
        host, port = parse_address(args, host='0.0.0.0')
        server = GameServer(host, port)
    except (OSError, ProtocolError) as e:
        print(f"Server setup failed: {e}")
        return 1

    print(f"Server is listening on port {server.port}")
    try:
        server.start()
    except (OSError, ProtocolError) as e:
        print(f"TCP server error: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nGame aborted.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
