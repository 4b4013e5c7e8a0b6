import socket
import sys

from protocol import (HOST, PORT, ProtocolError, decode_board, encode_move, is_reject,
                      is_terminal, parse_address, recv_message, send_message, terminal_text)
from tictactoe import RESULT_MESSAGES, is_marked, render


class Client:
    """Plays O against a GameServer, trusting it for every game result."""

    def __init__(self, host=HOST, port=PORT, read_input=input):
        self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self.server_socket.connect((host, port))
        except OSError:
            self.server_socket.close()
            raise
        self.read_input = read_input
        self.board = None
        print("Connected to server!")

    def play(self):
        while True:
            data = recv_message(self.server_socket)
            if is_terminal(data):
                message = terminal_text(data)
                print(message)
                return next(result for result, text in RESULT_MESSAGES.items() if text == message)

            if is_reject(data):
                if self.board is None:
                    raise ProtocolError("Move rejected before any board was received")
                print("Server rejected the move. Try again.")
            else:
                self.board = decode_board(data)
                print("Server: Here is the board:")
                print(render(self.board))

            move = self.prompt_move()
            send_message(self.server_socket, encode_move(move))

    def prompt_move(self):
        while True:
            choice = self.read_input("Your turn (O), choose a number (1-9): ").strip()
            try:
                move = int(choice)
            except ValueError:
                print("Invalid input. Please enter a number between 1 and 9.")
                continue
            if move < 1 or move > 9:
                print("Invalid choice. Try again.")
                continue
            if is_marked(self.board[move - 1]):
                print("Position already occupied. Choose another number.")
                continue
            return move

    def close(self):
        self.server_socket.close()


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    try:
        host, port = parse_address(args)
        client = Client(host, port)
    except ProtocolError as e:
        print(f"Invalid address/ Address not supported: {e}")
        return 1
    except OSError as e:
        print(f"Connection Failed: {e}")
        return 1

    try:
        client.play()
    except (OSError, ProtocolError) as e:
        print(f"TCP client error: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nGame aborted.")
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
