"""Factory function returning cost objects by model name."""

from __future__ import annotations

from typing import Any

from ..base import BaseCost


def cost_factory(model: str, *args: Any, **kwargs: Any) -> BaseCost:
    """Return a cost instance registered under ``model``."""

    for subclass in BaseCost.__subclasses__():
        if subclass.model == model:
            return subclass(*args, **kwargs)
    known = sorted(cls.model for cls in BaseCost.__subclasses__() if isinstance(cls.model, str))
    raise ValueError(f"Unknown cost model: {model!r}. Available models: {', '.join(known)}")
