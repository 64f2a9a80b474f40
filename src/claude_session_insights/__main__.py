"""Entry point for `python -m claude_session_insights`."""

import sys


def main():
    from claude_session_insights.cli import cli
    sys.exit(cli(prog_name="claude-insights"))


if __name__ == "__main__":
    main()
