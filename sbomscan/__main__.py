"""Entry point for `python -m sbomscan`."""

from __future__ import annotations

from sbomscan import cli


def main(argv: list[str] | None = None) -> int:
    return cli.main(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
