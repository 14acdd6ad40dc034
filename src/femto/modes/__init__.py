"""Mode framework, the editing mode and the prompt controller."""

from .base_mode import (
    QUIT_EVENT,
    STATUS_EVENT,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from .edit_mode import EditMode
from .prompt_mode import (
    NullPromptObserver,
    PromptMode,
    PromptObserver,
    PromptRequest,
    open_prompt,
)

__all__ = [
    "EditMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NullPromptObserver",
    "PromptMode",
    "PromptObserver",
    "PromptRequest",
    "QUIT_EVENT",
    "STATUS_EVENT",
    "open_prompt",
]
