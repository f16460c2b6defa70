"""Value types, intervals and exceptions."""
