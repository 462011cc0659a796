"""WizardSession: the single owner of one Store and its observers.

The session builds the Store, attaches the History Manager and the
Persistence Layer to it, and exposes the surface a front end drives: field
access through ``session.store``, progress, prompt generation, undo/redo and
project management. ``close()`` detaches both observers and cancels their
pending timers.
"""

import asyncio
from pathlib import Path

from lovabolt.config import get_config
from lovabolt.history import HistoryManager
from lovabolt.persistence import PersistenceLayer
from lovabolt.state import STEPS, PromptType
from lovabolt.store import SelectionStore
from lovabolt.utils.formatter import VARIANTS, synthesize
from lovabolt.utils.storage import FileStorage
from lovabolt.utils.validator import validate_project_info, validate_step


def default_storage() -> FileStorage:
    """File-backed storage configured from config.yaml / environment."""
    config = get_config()
    directory = Path(config.get("storage_dir", "./.lovabolt")).expanduser()
    return FileStorage(
        directory,
        quota_bytes=config.get("storage_quota_bytes"),
        max_retries=config.get("storage_max_retries", 2),
    )


class WizardSession:
    def __init__(self, storage=None, scheduler=None, restore: bool = True):
        """
        Args:
            storage: Durable slot backend. Defaults to the configured FileStorage.
            scheduler: Timer source for both debouncers. Defaults to the running
                asyncio loop, so a session built outside a loop must pass one.
            restore: Load the saved project from storage before returning.
        """
        if scheduler is None:
            scheduler = asyncio.get_running_loop()
        self.store = SelectionStore()
        self.storage = storage if storage is not None else default_storage()
        self.persistence = PersistenceLayer(self.store, self.storage, scheduler)
        self.history = HistoryManager(self.store, scheduler)
        self.prompt_text = ""
        self.prompt_type: PromptType = get_config().get("default_prompt_type", "detailed")
        self.restored = False
        if restore:
            self.restored = self.persistence.restore()
            # A restored project is the starting point of history, not an undoable edit.
            self.history.reset()

    # --- Store passthroughs ---

    @property
    def progress(self) -> int:
        return self.store.progress

    @property
    def current_step(self) -> str:
        return self.store.current_step

    def go_to(self, step: str) -> None:
        """Move the step pointer. Raises ValueError for an unknown step."""
        self.store.current_step = validate_step(step)

    def next_step(self) -> str:
        index = STEPS.index(self.store.current_step)
        self.store.current_step = STEPS[min(index + 1, len(STEPS) - 1)]
        return self.store.current_step

    def previous_step(self) -> str:
        index = STEPS.index(self.store.current_step)
        self.store.current_step = STEPS[max(index - 1, 0)]
        return self.store.current_step

    def validate_project(self) -> dict:
        return validate_project_info(self.store.project_info)

    # --- Prompts ---

    def generate_prompt(self) -> str:
        return synthesize(self.store.graph(), "detailed")

    def generate_basic_prompt(self) -> str:
        return synthesize(self.store.graph(), "basic")

    def set_prompt_type(self, prompt_type: str) -> None:
        if prompt_type not in VARIANTS:
            raise ValueError(f"Unknown prompt type '{prompt_type}'. Must be one of: {VARIANTS}")
        self.prompt_type = prompt_type

    def generate(self) -> str:
        """Render the selected prompt type and keep it as ``prompt_text``."""
        self.prompt_text = synthesize(self.store.graph(), self.prompt_type)
        return self.prompt_text

    # --- History ---

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # --- Project management ---

    def save_project(self) -> bool:
        return self.persistence.save_project()

    def load_project(self, record: dict) -> None:
        self.persistence.load_project(record)

    def clear_project(self) -> None:
        self.persistence.clear_project()
        self.prompt_text = ""

    def close(self) -> None:
        self.history.close()
        self.persistence.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
