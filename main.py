"""Entry point delegating to the glue pipeline CLI."""

import sys

from rcsp_ga.glue.pipeline import main as pipeline_main


def main() -> None:
    sys.exit(pipeline_main())


if __name__ == "__main__":
    main()
