from .base import *  # noqa: F401,F403
from .accounts import *  # noqa: F401,F403
from .logging import *  # noqa: F401,F403
from .ninja import *  # noqa: F401,F403
from .payments import *  # noqa: F401,F403
