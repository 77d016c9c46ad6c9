"""Parser and review-screen renderer for Flare Network atomic transactions."""

__version__ = "2.4.3"

__all__ = ["addressing", "cchain", "display", "errors", "outputs", "parser", "pchain", "reader", "txdef"]