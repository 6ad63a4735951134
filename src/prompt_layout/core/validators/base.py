"""Response validator interface and the accept-all default."""

from abc import ABC, abstractmethod
from typing import Any, Generic

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .models import PromptResponse, TValue, Validation


class PromptResponseValidator(ABC, Generic[TValue]):
    """Checks a model response after the fact."""

    @abstractmethod
    async def validate_response(
        self,
        context: Any,
        memory: Memory,
        tokenizer: Tokenizer,
        response: PromptResponse,
        remaining_attempts: int,
    ) -> Validation[TValue]:
        """Validate *response*.

        Args:
            context: Context for the current turn.
            memory: Read access to turn state.
            tokenizer: Tokenizer used for the prompt.
            response: Response to validate.
            remaining_attempts: Repair attempts left after this one.
        """


class DefaultResponseValidator(PromptResponseValidator[TValue]):
    """Validator that accepts every response."""

    async def validate_response(
        self,
        context: Any,
        memory: Memory,
        tokenizer: Tokenizer,
        response: PromptResponse,
        remaining_attempts: int,
    ) -> Validation[TValue]:
        return Validation(valid=True)
