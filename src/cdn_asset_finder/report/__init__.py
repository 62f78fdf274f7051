from .markdown import HEADERS, to_markdown_table, write_report

__all__ = ["HEADERS", "to_markdown_table", "write_report"]
