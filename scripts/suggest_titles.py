import argparse
import asyncio
import json
import sys

from title_suggest.agent_graph import run_suggestion
from title_suggest.config import settings
from title_suggest.errors import SuggestionError
from title_suggest.logger import setup_logger
from title_suggest.schemas import SuggestionRequest


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Suggest short video titles from a description.")
    parser.add_argument("--description", required=True, help="What the video is about.")
    parser.add_argument("--keywords", default=None, help="Comma-separated keywords.")
    parser.add_argument("--niche", default=None)
    parser.add_argument("--language", default=None)
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the model's parsed JSON (or raw text) instead of normalized titles.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logger(level=settings.log_level, log_dir=settings.log_dir)

    req = SuggestionRequest(
        description=args.description,
        keywords=args.keywords,
        niche=args.niche,
        language=args.language,
    )
    try:
        state = asyncio.run(run_suggestion(req, normalize=not args.raw))
    except SuggestionError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if args.raw:
        parsed = state.get("parsed")
        print(state["raw_text"] if parsed is None else json.dumps(parsed, indent=2, ensure_ascii=False))
    else:
        for title in state["titles"]:
            print(title)
    return 0


if __name__ == "__main__":
    sys.exit(main())
