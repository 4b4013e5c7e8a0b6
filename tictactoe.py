SERVER_MARK = "X"
CLIENT_MARK = "O"
MARKS = (SERVER_MARK, CLIENT_MARK)

IN_PROGRESS = "InProgress"
SERVER_WINS = "ServerWins"
CLIENT_WINS = "ClientWins"
DRAW = "Draw"

# Terminal message for every result that ends the session
RESULT_MESSAGES = {
    SERVER_WINS: "Server (X) wins!",
    CLIENT_WINS: "Client (O) wins!",
    DRAW: "Draw",
}

# Rows, columns, diagonals as 0-based cell indexes
LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class MoveError(ValueError):
    pass


class OutOfRange(MoveError):
    def __init__(self, position):
        super().__init__(f"Position {position} is outside 1-9")
        self.position = position


class CellOccupied(MoveError):
    def __init__(self, position, mark):
        super().__init__(f"Cell {position} is already taken by {mark}")
        self.position = position
        self.mark = mark


class MalformedMove(MoveError):
    def __init__(self, payload):
        super().__init__(f"Malformed move payload: {payload!r}")
        self.payload = payload


class NotYourTurn(MoveError):
    def __init__(self, player):
        super().__init__(f"It is not {player}'s turn")
        self.player = player


class GameOver(MoveError):
    def __init__(self, result):
        super().__init__(f"Game already finished: {result}")
        self.result = result


def initial_board():
    return [str(position) for position in range(1, 10)]


def is_marked(cell):
    return cell in MARKS


def check_winner(board, mark):
    return any(all(board[i] == mark for i in line) for line in LINES)


def is_full(board):
    return all(is_marked(cell) for cell in board)


def evaluate(board, mark):
    """Score the board for the mark that just moved.

    The line check runs before the full-board check, so a final move that
    both completes a line and fills the board counts as a win.
    """
    if check_winner(board, mark):
        return SERVER_WINS if mark == SERVER_MARK else CLIENT_WINS
    if is_full(board):
        return DRAW
    return IN_PROGRESS


def render(board):
    return "\n".join(" ".join(board[i:i + 3]) for i in range(0, 9, 3))


class TicTacToe:
    def __init__(self):
        self.board = initial_board()
        self.current_player = SERVER_MARK
        self.result = IN_PROGRESS

    @property
    def is_finished(self):
        return self.result != IN_PROGRESS

    def make_move(self, position, player=None):
        """Place the mark of ``player`` (default: side to move) at 1-based ``position``.

        Returns a copy of the updated board. Raises a ``MoveError`` subclass
        and leaves board and turn untouched when the move is rejected.
        """
        if self.is_finished:
            raise GameOver(self.result)
        if player is not None and player != self.current_player:
            raise NotYourTurn(player)
        if not isinstance(position, int) or not 1 <= position <= 9:
            raise OutOfRange(position)
        cell = self.board[position - 1]
        if is_marked(cell):
            raise CellOccupied(position, cell)

        mark = self.current_player
        self.board[position - 1] = mark
        self.current_player = CLIENT_MARK if mark == SERVER_MARK else SERVER_MARK
        self.result = evaluate(self.board, mark)
        return list(self.board)

    def render(self):
        return render(self.board)

    def result_message(self):
        return RESULT_MESSAGES.get(self.result)
