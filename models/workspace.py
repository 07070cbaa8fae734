"""Workspace: the aggregate that owns all simulator state.

A Workspace holds the current filesystem, terminal session, chat transcript
and selected model. Each of these is an immutable value; operations replace
them with new values. Terminal commands and generation requests are separate
state threads: neither touches the other's transcript.

The only suspension point is the generation request. The workspace guards it
with an in-flight flag so at most one generation runs at a time, while
terminal commands are never blocked.
"""

import logging
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from client.exceptions import GenerationTransportError
from models.catalog import MODEL_CATALOG, ModelDescriptor, find_model
from models.chat import ChatMessage, ChatState
from models.extractor import GeneratedFileBatch, extract_files
from models.filesystem import HOME_DIRECTORY, FileSystemState, outputs_path
from models.session import Session
from models.shell import CommandResult, ShellInterpreter

logger = logging.getLogger(__name__)

FALLBACK_FILENAME = "hello.py"
FALLBACK_CONTENT = (
    "def greet(name):\n"
    '    return f"Hello, {name}!"\n'
    "\n"
    'if __name__ == "__main__":\n'
    '    print(greet("World"))'
)


def fallback_response(error_message: str) -> str:
    """Return the canned assistant message used when generation fails."""
    return (
        f"Error: {error_message}. Using simulated response.\n\n"
        "Here's a sample Python function:\n\n"
        f"FILENAME: {FALLBACK_FILENAME}\n"
        f"```python\n{FALLBACK_CONTENT}\n```"
    )


class GenerationInFlightError(RuntimeError):
    """Raised when a generation is requested while another is running."""

    def __init__(self, message: str = "A generation request is already in progress"):
        self.message = message
        super().__init__(message)


class NoModelSelectedError(ValueError):
    """Raised when a generation is requested before a model is selected."""

    def __init__(self, message: str = "Please select a model first"):
        self.message = message
        super().__init__(message)


class ModelNotFoundError(LookupError):
    """Raised when selecting a model id that is not in the catalog.

    Args:
        model_id: The requested model id.
    """

    def __init__(self, model_id: str):
        self.model_id = model_id
        self.available_models = [m.model_id for m in MODEL_CATALOG]
        super().__init__(f"Model '{model_id}' not found")


class TextGenerator(Protocol):
    """Anything that can turn a prompt into assistant text."""

    async def generate(self, prompt: str, model: ModelDescriptor) -> str: ...


class GenerationOutcome(BaseModel):
    """Result of one generation request.

    Args:
        message: The assistant message added to the chat transcript.
        batch: Files extracted (or substituted) and staged.
        outputs_path: Directory the files were merged into.
        fallback: True when the canned response was substituted.
    """

    model_config = ConfigDict(frozen=True)

    message: ChatMessage
    batch: GeneratedFileBatch
    outputs_path: str
    fallback: bool = Field(default=False)


class Workspace:
    """Holds the simulator state and routes terminal and chat input.

    Attributes:
        filesystem: Current virtual filesystem.
        session: Current terminal session.
        chat: Current chat transcript.
        selected_model: Model used for generation, if one was selected.
        is_generating: True while a generation request is awaited.
    """

    def __init__(
        self,
        generator: TextGenerator,
        home_directory: str = HOME_DIRECTORY,
    ) -> None:
        """Initialize an empty workspace.

        Args:
            generator: Backend used for generation requests.
            home_directory: Initial working directory and ``cd`` target.
        """
        self.generator = generator
        self.home_directory = home_directory
        self.interpreter = ShellInterpreter(home_directory=home_directory)
        self.filesystem = FileSystemState()
        self.session = Session(cwd=home_directory)
        self.chat = ChatState()
        self.selected_model: ModelDescriptor | None = None
        self.is_generating = False

    def execute(self, line: str) -> CommandResult | None:
        """Run one terminal command line.

        Returns:
            The command result, or None for a blank line.
        """
        self.session, self.filesystem, result = self.session.run(
            line, self.filesystem, self.interpreter
        )
        return result

    def select_model(self, model_id: str) -> ModelDescriptor:
        """Select the model used for generation.

        Raises:
            ModelNotFoundError: If ``model_id`` is not in the catalog.
        """
        descriptor = find_model(model_id)
        if descriptor is None:
            raise ModelNotFoundError(model_id)
        self.selected_model = descriptor
        logger.info("Selected model %s", descriptor.name)
        return descriptor

    def receive_generated_batch(self, batch: GeneratedFileBatch) -> None:
        """Stage ``batch`` into the outputs directory of the current cwd."""
        self.filesystem = self.session.receive_generated_batch(batch, self.filesystem)

    async def generate(self, prompt: str) -> GenerationOutcome:
        """Send ``prompt`` to the generator and stage any returned files.

        Transport failures never propagate: the canned response and the
        ``hello.py`` file are substituted instead. Any other error removes the
        user message again before propagating. Files are merged into the
        outputs directory of the working directory current when the response
        arrives.

        Raises:
            ValueError: If the prompt is blank.
            NoModelSelectedError: If no model has been selected.
            GenerationInFlightError: If another generation is running.
        """
        if not prompt.strip():
            raise ValueError("Prompt cannot be empty")
        if self.selected_model is None:
            raise NoModelSelectedError()
        if self.is_generating:
            raise GenerationInFlightError()

        model = self.selected_model
        previous_chat = self.chat
        self.is_generating = True
        self.chat = self.chat.add_message("user", prompt)
        try:
            try:
                text = await self.generator.generate(prompt, model)
                batch = extract_files(text)
                fallback = False
            except GenerationTransportError as e:
                logger.warning("Generation failed, using simulated response: %s", e)
                text = fallback_response(str(e))
                batch = GeneratedFileBatch(
                    files={FALLBACK_FILENAME: FALLBACK_CONTENT},
                    languages={FALLBACK_FILENAME: "python"},
                )
                fallback = True

            self.receive_generated_batch(batch)
            self.chat = self.chat.add_message(
                "assistant",
                text,
                metadata={
                    "model": model.name,
                    "files": batch.filenames,
                    "fallback": fallback,
                },
            )
        except Exception:
            # A failed request leaves no half-finished turn behind.
            self.chat = previous_chat
            raise
        finally:
            self.is_generating = False

        logger.info("Generation finished with %d file(s), fallback=%s", len(batch), fallback)
        return GenerationOutcome(
            message=self.chat.last_message,
            batch=batch,
            outputs_path=outputs_path(self.session.cwd),
            fallback=fallback,
        )

    def list_outputs(self) -> dict[str, str]:
        """Return the files in the outputs directory of the current cwd."""
        path = outputs_path(self.session.cwd)
        return {
            name: content
            for name in self.filesystem.list_entries(path)
            if (content := self.filesystem.read_file(path, name)) is not None
        }

    def read_output(self, filename: str) -> str | None:
        """Return the content of one generated file, or None."""
        return self.filesystem.read_file(outputs_path(self.session.cwd), filename)

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the whole workspace."""
        return {
            "session": self.session.get_snapshot(),
            "filesystem": self.filesystem.get_snapshot(),
            "chat": self.chat.get_snapshot(),
            "selected_model": self.selected_model.model_dump() if self.selected_model else None,
            "is_generating": self.is_generating,
        }
