"""PromptEditor Engine — errors, configuration, structured logging."""
