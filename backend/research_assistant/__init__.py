"""Backend of the research assistant: chat relay, source submissions and review."""
