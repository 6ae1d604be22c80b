"""Terminal game: you play one colour in UCI notation, the bot plays the other."""

import argparse
import threading

from chessbattle.commentary import CommentaryService
from chessbattle.config import CONFIG
from chessbattle.core.strategy import DifficultyTier
from chessbattle.errors import ChessBattleError
from chessbattle.game import GameController
from chessbattle.log import setup_logging
from chessbattle.persistence import GameStore


def _wait_for_bot(controller: GameController, delay_ms: int):
    done = threading.Event()
    result = []

    def on_move(record):
        result.append(record)
        done.set()

    print(f"{controller.bot_name} is thinking...")
    controller.schedule_bot_move(on_move, delay_ms=delay_ms)
    done.wait()
    return result[0]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play chess against the Chess Battle bot.")
    parser.add_argument("--difficulty", default=CONFIG.bot.difficulty,
                        help="random | greedy | deep (or beginner / intermediate / professional)")
    parser.add_argument("--color", default=CONFIG.bot.human_color, choices=["white", "black"])
    parser.add_argument("--delay-ms", type=int, default=CONFIG.bot.think_delay_ms,
                        help="bot thinking delay before each reply")
    parser.add_argument("--user", default="guest", help="save slot for resuming a game")
    parser.add_argument("--no-save", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(CONFIG.log_level)
    store = None if args.no_save or not CONFIG.store.enabled else GameStore(CONFIG.store.path)
    controller = GameController(
        store=store,
        commentary=CommentaryService(),
        user_id=args.user,
        difficulty=DifficultyTier.parse(args.difficulty),
        human_color=args.color,
    )
    if controller.load():
        print("Resumed saved game.")

    print(f"You are playing {args.color} against {controller.bot_name} ({controller.difficulty.value}).")
    print("Enter moves like e2e4 (e7e8n to underpromote). Commands: undo, new, quit")

    while True:
        print(controller.board)
        print("----------------------------")
        if controller.board.is_game_over():
            break

        if controller.is_bot_turn():
            record = _wait_for_bot(controller, args.delay_ms)
            if record is None:
                break
            print(f"{controller.bot_name} plays: {record.san}  {record.commentary}")
            continue

        user_move = input("Your move: ").strip().lower()
        if user_move in ("quit", "exit"):
            print("Goodbye")
            return
        if user_move == "new":
            controller.new_game()
            continue
        try:
            if user_move == "undo":
                controller.undo()
                continue
            if len(user_move) not in (4, 5):
                print("Invalid move")
                continue
            promotion = user_move[4] if len(user_move) == 5 else None
            record = controller.human_move(user_move[:2], user_move[2:4], promotion)
        except ChessBattleError as e:
            print(e)
            continue
        if record.commentary:
            print(record.commentary)

    status = controller.status()
    print("Game Over")
    print(f"Result: {status['result']}")


if __name__ == "__main__":
    main()
