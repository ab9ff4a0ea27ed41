"""HTTP handlers, form binding, problem-detail responses and Markdown rendering for a portfolio and article archive."""

__version__ = "0.1.0"