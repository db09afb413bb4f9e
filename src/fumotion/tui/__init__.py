"""Interactive terminal interface built on rich and prompt_toolkit."""
