from .log_reader import LogDocument, ReadError, read_log, split_lines

__all__ = ["LogDocument", "ReadError", "read_log", "split_lines"]
