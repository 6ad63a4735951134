"""Domain models for prompt rendering.

Re-exports every public symbol so imports like
``from prompt_layout.core.prompts.models import Message`` keep working.
"""

from .constants import *  # noqa: F401, F403
from .errors import *  # noqa: F401, F403
from .message import *  # noqa: F401, F403
from .rendered import *  # noqa: F401, F403
