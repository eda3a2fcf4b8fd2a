from .prompt import Prompt
from .tag import Tag
from .contribution import Contribution
from .setting import Setting

__all__ = ["Prompt", "Tag", "Contribution", "Setting"]
