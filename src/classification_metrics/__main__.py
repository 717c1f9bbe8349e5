"""Entry point for ``python -m classification_metrics``."""

from classification_metrics.app import run_app


def main() -> None:
    """Run the command line application."""
    run_app()


if __name__ == "__main__":
    main()
