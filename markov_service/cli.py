"""
Command line for the Markov text service.

Usage:
    markov-service train corpus.txt more.txt --order 2 --output model.json
    markov-service generate --model model.json --length 50 --count 3 --seed 7
    markov-service stats --model model.json --top 5
    markov-service serve --port 8000
"""

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from markov_service.config import settings
from markov_service.services.errors import MarkovError
from markov_service.services.markov import MarkovTextGenerator
from markov_service.services.markov_config import MarkovConfig
from markov_service.services.persistence import peek_order
from markov_service.services.text_source import read_all_text
from markov_service.utils.logger import DATE_FORMAT, LOG_FORMAT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="markov-service", description="Markov chain text generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    train = subparsers.add_parser("train", help="Train a model from text files")
    train.add_argument("files", nargs="+", help="UTF-8 text files to train on")
    train.add_argument("--order", type=int, default=settings.MARKOV_ORDER, help="State order")
    train.add_argument("--output", type=str, required=True, help="Where to write the model JSON")
    train.add_argument("--case-sensitive", action="store_true", default=settings.MARKOV_CASE_SENSITIVE)
    train.add_argument("--no-preserve-whitespace", action="store_true",
                       help="Drop newlines and tabs instead of keeping them as tokens")

    generate = subparsers.add_parser("generate", help="Generate text from a saved model")
    generate.add_argument("--model", type=str, required=True, help="Model JSON file")
    generate.add_argument("--length", type=int, default=100, help="Maximum tokens per text")
    generate.add_argument("--count", type=int, default=1, help="Number of texts")
    generate.add_argument("--start-with", type=str, default=None, help="Seed text")
    generate.add_argument("--seed", type=int, default=settings.MARKOV_SEED, help="Random seed")
    generate.add_argument("--min-probability", type=float, default=settings.MARKOV_MIN_PROBABILITY)

    stats = subparsers.add_parser("stats", help="Show statistics of a saved model")
    stats.add_argument("--model", type=str, required=True, help="Model JSON file")
    stats.add_argument("--top", type=int, default=10, help="Number of busiest states to list")

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", type=str, default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)

    return parser


def _model_order(path: str) -> int:
    """Order stored in a model file, or the configured default if unreadable."""
    return peek_order(read_all_text(path), settings.MARKOV_ORDER)


def cmd_train(args: argparse.Namespace) -> int:
    config = MarkovConfig.from_settings(
        settings,
        order=args.order,
        case_sensitive=args.case_sensitive,
        preserve_whitespace=False if args.no_preserve_whitespace else None,
    )
    generator = MarkovTextGenerator(config)
    for path in args.files:
        generator.train_from_file(path)
    generator.save_to_file(args.output)
    print(f"Trained {generator.state_count} states from {len(args.files)} file(s) -> {args.output}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    config = MarkovConfig.from_settings(
        settings,
        order=_model_order(args.model),
        min_probability_threshold=args.min_probability,
        rng=random.Random(args.seed) if args.seed is not None else None,
    )
    generator = MarkovTextGenerator(config).load_from_file(args.model)
    for text in generator.generate_texts(args.count, args.length, args.start_with):
        print(text)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    order = _model_order(args.model)
    generator = MarkovTextGenerator(MarkovConfig(order=order)).load_from_file(args.model)
    print(json.dumps(generator.get_statistics(args.top).to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "markov_service.app:app",
        host=args.host,
        port=args.port,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


COMMANDS = {
    "train": cmd_train,
    "generate": cmd_generate,
    "stats": cmd_stats,
    "serve": cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    try:
        return COMMANDS[args.command](args)
    except MarkovError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
