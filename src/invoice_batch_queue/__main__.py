"""Module entry point for `python -m invoice_batch_queue`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
