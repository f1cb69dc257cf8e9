"""Built-in report templates."""
