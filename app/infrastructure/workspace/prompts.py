"""User prompt capability used by interactive write paths.

The engine never depends on a prompter for reads. File creation and delete
confirmation ask through this interface; a host application provides its own
implementation, ``DeclinePrompter`` is used when there is nobody to ask.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class Prompter(ABC):
    """Interactive questions and notifications."""

    @abstractmethod
    async def choose(self, message: str, options: Sequence[str]) -> Optional[str]:
        """Ask the user to pick one of ``options``.

        Returns:
            The chosen option, or None when the user dismissed the question.
        """

    @abstractmethod
    async def ask_text(self, prompt: str, default: str = "") -> Optional[str]:
        """Ask for free text.

        Returns:
            The entered text, or None when the user cancelled.
        """

    @abstractmethod
    async def show_error(self, message: str) -> None:
        """Report a user-visible failure."""

    async def show_info(self, message: str) -> None:
        """Report a user-visible outcome. Silent unless overridden."""

    async def confirm(self, message: str) -> bool:
        """Yes/no question built on ``choose``."""
        return await self.choose(message, ["Yes", "No"]) == "Yes"


class DeclinePrompter(Prompter):
    """Prompter for non-interactive hosts: every question is declined."""

    async def choose(self, message: str, options: Sequence[str]) -> Optional[str]:
        logger.info("prompt_declined", message=message)
        return None

    async def ask_text(self, prompt: str, default: str = "") -> Optional[str]:
        logger.info("prompt_declined", message=prompt)
        return None

    async def show_error(self, message: str) -> None:
        logger.error("user_error", message=message)

    async def show_info(self, message: str) -> None:
        logger.info("user_info", message=message)
