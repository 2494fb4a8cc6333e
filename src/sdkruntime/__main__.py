"""Module entrypoint for `python -m sdkruntime`."""

from sdkruntime.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
