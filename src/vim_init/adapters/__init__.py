"""Front-ends that present a configured host."""

__all__ = ["textual"]
