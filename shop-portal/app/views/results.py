"""What a page controller asks the page layer to do"""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Loading:
    """Session not resolved yet; show a spinner and take no action"""
    template: str = "loading.html"


@dataclass(frozen=True)
class Redirect:
    location: str


@dataclass(frozen=True)
class Render:
    template: str
    context: dict[str, Any] = field(default_factory=dict)


ViewResult = Union[Loading, Redirect, Render]
