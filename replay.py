import argparse
import logging
import os
import sys

from bpindex.models.exceptions import BPlusTreeError
from bpindex.replay import Replayer, render_tree
from bpindex.tree import BPlusTree

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()

KEY_PARSERS = {"int": int, "float": float, "str": str}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay insert/delete commands against a B+-tree.")
    parser.add_argument("path", help="command script, one 'insert <key>' or 'delete <key>' per line")
    parser.add_argument("--fanout", type=int, default=BPlusTree.DEFAULT_FANOUT)
    parser.add_argument("--key-type", choices=sorted(KEY_PARSERS), default="int")
    parser.add_argument("--final-only", action="store_true", help="print only the last frame")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        replayer = Replayer(fanout=args.fanout, key_parser=KEY_PARSERS[args.key_type])
        frames = replayer.run_file(args.path)
    except (BPlusTreeError, OSError) as e:
        logger.warning(f"Replay failed: {e}")
        return 1

    logger.info(f"Replayed {len(frames)} commands from {args.path}")
    shown = frames[-1:] if args.final_only else frames
    for frame in shown:
        print(f"{frame.index} : {frame.command}")
        print(render_tree(frame.tree))
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
