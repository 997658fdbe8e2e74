"""Allow ``python -m distill_copy`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m distill_copy`` behaves identically to the ``distill-copy``
console script.
"""

from __future__ import annotations

from distill_copy.cli.app import cli

if __name__ == "__main__":
    cli()
