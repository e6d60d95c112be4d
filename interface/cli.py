import argparse
from typing import Optional, Sequence, Tuple

from mnkengine.config import CONFIG, setup_logging
from mnkengine.core.board import IllegalMoveError
from mnkengine.session import GameSession


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """Parse 'row col' or 'row,col' into a pair of ints."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play an m,n,k game against the engine in the terminal.")
    parser.add_argument("--size", type=int, default=CONFIG.ui.default_size, help="board size N (N x N)")
    parser.add_argument("--second", action="store_true", help="let the engine move first")
    parser.add_argument("--depth", type=int, default=None, help="search depth, negative for full search")
    parser.add_argument("--log-level", default=None, help="override the configured log level")
    return parser


def play(session: GameSession) -> GameSession:
    reply = session.start()
    if reply is not None:
        print(f"Engine plays: {reply[0]} {reply[1]}")

    while not session.is_over:
        print(session.engine.board.render())
        print("----------------------------")

        user_move = input(f"Enter your move as 'row col' ({session.human_symbol.name}): ")
        move = parse_move(user_move)
        if move is None:
            print("Could not read that move, try again.")
            continue
        try:
            reply = session.play_human(*move)
        except IllegalMoveError as e:
            print(f"Illegal move: {e}")
            continue
        if reply is not None:
            print(f"Engine plays: {reply[0]} {reply[1]}")

    print(session.engine.board.render())
    result = session.result()
    print("Game Over")
    print(f"{result.header} {result.message}")
    return session


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    if args.size < 1:
        print("Board size must be a positive integer.")
        return 2
    session = GameSession(args.size, human_first=not args.second)
    if args.depth is not None:
        session.depth = args.depth
    play(session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
