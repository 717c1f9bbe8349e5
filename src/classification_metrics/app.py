"""Application builder for the classification metrics toolkit.

This module loads environment configuration, sets up structured logging and
wires the command line interface to the evaluation service.
"""

from pathlib import Path

from dotenv import load_dotenv

from classification_metrics.interfaces.cli import CLIInterface
from classification_metrics.service import EvaluationService
from classification_metrics.utils.logger import configure_logging, get_logger
from classification_metrics.utils.settings import get_settings, reset_settings


class Application:
    """Main application class that orchestrates components."""

    def __init__(self, dotenv_path: Path | None = None) -> None:
        """Initialize the application.

        Args:
            dotenv_path: Optional path to .env file to load

        """
        if dotenv_path:
            load_dotenv(dotenv_path, override=True)
        else:
            load_dotenv(override=True)
        reset_settings()

        settings = get_settings()
        configure_logging(
            log_level=settings.log_level,
            log_format=settings.log_format,
            log_file=settings.log_file_path,
        )
        self.logger = get_logger(__name__)

        self.service = create_evaluation_service()
        self.interface = CLIInterface(service=self.service)

        self.logger.info(
            "Application initialized",
            interface=self.interface.name,
            settings=settings.model_dump(mode="json"),
            dotenv_loaded=str(dotenv_path) if dotenv_path else "default",
        )

    def run(self) -> None:
        """Run the application."""
        self.logger.debug("Starting application", interface=self.interface.name)

        try:
            self.interface.run()
        except Exception as e:
            self.logger.error("Application error", error=str(e))
            raise
        finally:
            self.logger.debug("Application shutting down")


def create_evaluation_service() -> EvaluationService:
    """Construct an evaluation service using application defaults."""
    return EvaluationService()


def create_app(dotenv_path: Path | None = None) -> Application:
    """Create an application instance.

    Args:
        dotenv_path: Optional path to .env file to load

    Returns:
        Application: Configured application instance

    """
    return Application(dotenv_path=dotenv_path)


def run_app(dotenv_path: Path | None = None) -> None:
    """Create and run the application.

    Args:
        dotenv_path: Optional path to .env file to load

    """
    app = create_app(dotenv_path=dotenv_path)
    app.run()
