"""Entry point for `python -m claude_statusline`."""

import sys

from claude_statusline.errors import DEGRADED_LINE, MissingCapability


def _load_runner():
    try:
        from claude_statusline.app import run
    except ImportError as e:
        raise MissingCapability(f"required module unavailable: {e.name}") from e
    return run


def main():
    try:
        run = _load_runner()
    except MissingCapability as e:
        print(DEGRADED_LINE)
        print(f"claude-statusline: {e}", file=sys.stderr)
        sys.exit(0)
    sys.exit(run())


if __name__ == "__main__":
    main()
