"""Entry point: search | transcription | check-config."""

import sys

USAGE = (
    "Usage: python -m src.main search <audio|presentation> [--dataset ID] <query...>\n"
    "       python -m src.main transcription <audio|presentation> <id>\n"
    "       python -m src.main check-config"
)


def _pop_option(args: list[str], name: str) -> str | None:
    if name not in args:
        return None
    idx = args.index(name)
    value = args[idx + 1] if idx + 1 < len(args) else None
    del args[idx : idx + 2]
    return value


def main():
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)
    mode = sys.argv[1].lower()

    if mode == "check-config":
        from src.core.config import config

        errors = config.validate()
        for error in errors:
            print(f"Config error: {error}")
        sys.exit(1 if errors else 0)

    if mode not in ("search", "transcription"):
        print(f"Unknown mode: {mode}")
        print(USAGE)
        sys.exit(1)

    from src.interfaces.oneshot import main_search, main_transcription, parse_domain

    args = sys.argv[2:]
    domain = parse_domain(args[0]) if args else None
    if domain is None:
        print(USAGE)
        sys.exit(1)
    args = args[1:]

    if mode == "search":
        dataset_id = _pop_option(args, "--dataset")
        query = " ".join(args).strip() if args else sys.stdin.read().strip()
        sys.exit(main_search(domain, query, dataset_id=dataset_id))

    sys.exit(main_transcription(domain, args[0] if args else ""))


if __name__ == "__main__":
    main()
