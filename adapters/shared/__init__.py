"""Parsing and rendering helpers shared by the Markdown-based adapters."""
