"""Base collector class for sources backed by an external command"""
import subprocess
from abc import ABC, abstractmethod
from typing import Any, List
from config import Config
from errors import CommandError
from logging_config import get_logger


logger = get_logger(__name__)


class BaseCollector(ABC):
    """Base class for all raw data collectors"""

    def __init__(self, config: Config, name: str = "", help_text: str = ""):
        self.config = config
        self._name = name
        self._help_text = help_text

    @abstractmethod
    def command(self) -> List[str]:
        """Command line to execute"""

    @abstractmethod
    def collect(self) -> Any:
        """Run the command and return its decoded output"""

    @property
    def name(self) -> str:
        """Collector name for identification"""
        return self._name

    @property
    def help_text(self) -> str:
        """Help text describing what this collector does"""
        return self._help_text or f"{self.name} collector"

    def run_command(self) -> str:
        """Run ``command()`` with the configured timeout and return its stdout"""
        command = self.command()
        logger.debug("Running command", collector=self.name, help=self.help_text, command=command)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.config.command_timeout
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(command, f"timed out after {self.config.command_timeout}s") from e
        except OSError as e:
            raise CommandError(command, str(e)) from e
        except UnicodeDecodeError as e:
            raise CommandError(command, f"output is not valid UTF-8: {e}") from e

        if result.returncode != 0:
            output = (result.stderr or result.stdout or "").strip()
            raise CommandError(
                command,
                f"exited with status {result.returncode}: {output}",
                returncode=result.returncode,
                output=output
            )

        return result.stdout
