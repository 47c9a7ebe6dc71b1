"""Rich renderers for the TaskTaker screen."""
