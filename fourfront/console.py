import argparse
import logging
import random
from typing import Callable, List, Optional

from fourfront.core.config import configure_logging, settings
from fourfront.core.opponent_registry import registry
from fourfront.engine.ai import AIPlayer
from fourfront.engine.board import BoardState
from fourfront.models.enums import Piece

logger = logging.getLogger(__name__)

HUMAN_PIECE = Piece.X
AI_PIECE = Piece.O
DEFAULT_OPPONENT = "big-johninator"


def run_game(board: BoardState, ai: AIPlayer,
             read: Callable[[str], str] = input,
             write: Callable[[str], None] = print) -> Optional[Piece]:
    """
    Plays human (X, moves first) against the AI until someone wins, the board
    fills up, or input runs out. Returns the winning piece, or None.
    """
    human = ai.opponent_piece
    write(board.to_text(ai.name))

    while True:
        # --- Human Turn ---
        try:
            user_input = read(f"\nYour move (1-{board.width}): ")
        except EOFError:
            write("\nGoodbye.")
            return None

        try:
            col = int(user_input.strip()) - 1
        except ValueError:
            write("Please enter a valid number.")
            continue

        if col < 0 or col >= board.width or not board.is_column_open(col):
            write("Invalid move. Try again.")
            continue

        board.drop(col, human)
        write(board.to_text(ai.name))

        if board.check_win() is human:
            write("\nYou win!")
            return human
        if board.is_full():
            write("\nGame Over! It's a Draw.")
            return None

        # --- AI Turn ---
        write(f"\n{ai.name} is thinking...")
        move = ai.choose_move(board)
        board.drop(move, ai.ai_piece)
        logger.debug("AI reasoning: %s", ai.last_explanation)

        write(f"{ai.name} plays column {move + 1}")
        write(board.to_text(ai.name))

        if board.check_win() is ai.ai_piece:
            write("\nYou lose!")
            return ai.ai_piece
        if board.is_full():
            write("\nGame Over! It's a Draw.")
            return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Connect Four against the computer.")
    parser.add_argument("--opponent", default=DEFAULT_OPPONENT,
                        choices=sorted(registry.list_all()), help="AI preset to play against")
    parser.add_argument("--depth", type=int, help="override the preset's search depth")
    parser.add_argument("--mistake-rate", type=float, help="override the preset's mistake rate (0-1)")
    parser.add_argument("--width", type=int, default=7)
    parser.add_argument("--height", type=int, default=6)
    parser.add_argument("--win-length", type=int, default=4)
    parser.add_argument("--time-limit", type=float, default=settings.time_limit,
                        help="seconds per AI move, 0 for no limit")
    parser.add_argument("--seed", type=int, help="seed the AI's mistake rolls")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    preset = registry.get(args.opponent)
    ai = AIPlayer(
        ai_piece=AI_PIECE,
        depth=args.depth if args.depth is not None else preset.depth,
        mistake_rate=args.mistake_rate if args.mistake_rate is not None else preset.mistake_rate,
        name=preset.label,
        rng=random.Random(args.seed) if args.seed is not None else None,
        time_limit=args.time_limit or None,
    )
    board = BoardState(width=args.width, height=args.height, win_length=args.win_length)

    print("=======================================")
    print(f"   CONNECT FOUR: Human vs {ai.name}")
    print("=======================================")
    run_game(board, ai)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
