from . import io_text, jsonl

__all__ = ["io_text", "jsonl"]
