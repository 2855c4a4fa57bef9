"""Special-form handlers for the Egg evaluator."""

__all__ = [
    "bind",
    "control",
    "fn",
    "helpers",
]
