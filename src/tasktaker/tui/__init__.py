"""Terminal user interface for TaskTaker."""
